"""
Pytest configuration and shared fixtures.

- db_session: fresh in-memory schema per test
- client: TestClient for public routes
- admin_client: TestClient with the admin route guard satisfied
- make_client / make_record / make_service: seed helpers
"""
import os
from datetime import date
from decimal import Decimal

import pytest

# Must be set before barberdesk is imported: the engine is built at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["REDIS_URL"] = ""
os.environ["DB_LOG_SLOW_QUERIES"] = "false"
os.environ["SUPABASE_URL"] = "https://example.supabase.co"
os.environ["SUPABASE_ANON_KEY"] = "test-anon-key"

from fastapi.testclient import TestClient  # noqa: E402

from barberdesk.auth import require_admin  # noqa: E402
from barberdesk.database import Base, SessionLocal, engine  # noqa: E402
from barberdesk.main import app  # noqa: E402
from barberdesk.models import AdminProfile, Client, Service, WorkRecord  # noqa: E402


@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def admin_client(client):
    app.dependency_overrides[require_admin] = lambda: AdminProfile(user_id="admin-user", full_name="Admin")
    yield client
    app.dependency_overrides.pop(require_admin, None)


@pytest.fixture
def make_client(db_session):
    def _make(name="Carlos Benítez", id_number="4567890", phone="0981 123456"):
        record = Client(name=name, id_number=id_number, phone=phone)
        db_session.add(record)
        db_session.commit()
        db_session.refresh(record)
        return record

    return _make


@pytest.fixture
def make_record(db_session):
    def _make(service_date=date(2025, 6, 1), amount="50000", description="Corte clásico", **extra):
        record = WorkRecord(
            service_date=service_date,
            amount_charged=Decimal(amount),
            service_description=description,
            **extra,
        )
        db_session.add(record)
        db_session.commit()
        db_session.refresh(record)
        return record

    return _make


@pytest.fixture
def make_service(db_session):
    def _make(name="Corte + Barba", price="70000", duration_minutes=45):
        service = Service(name=name, price=Decimal(price), duration_minutes=duration_minutes)
        db_session.add(service)
        db_session.commit()
        db_session.refresh(service)
        return service

    return _make
