"""Public booking calendar and admin reservation management"""
from datetime import date

import pytest
from sqlalchemy.exc import IntegrityError

from barberdesk.config import BOOKING_SLOTS
from barberdesk.domain.reservations import service as reservation_service
from barberdesk.domain.reservations.repository import ReservationRepository
from barberdesk.models import Reservation, ReservationStatus

TODAY = date(2025, 6, 20)


@pytest.fixture(autouse=True)
def fixed_today(monkeypatch):
    monkeypatch.setattr(reservation_service, "local_today", lambda: TODAY)


def _book(client, **overrides):
    payload = {
        "client_name": "Carlos",
        "client_phone": "0981 123456",
        "reservation_date": "2025-06-21",
        "reservation_time": "10:00",
    }
    payload.update(overrides)
    return client.post("/booking", json=payload)


def test_availability_lists_every_configured_slot(client):
    response = client.get("/booking/availability", params={"date": "2025-06-21"})

    assert response.status_code == 200
    data = response.json()
    assert data["day"] == "2025-06-21"
    assert [s["time"] for s in data["slots"]] == BOOKING_SLOTS
    assert all(s["available"] for s in data["slots"])


def test_booking_creates_a_pending_reservation(client, make_service):
    service = make_service(name="Corte")

    response = _book(client, service_id=service.id)

    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "pending"
    assert data["service_name"] == "Corte"


def test_taken_slot_is_unavailable_and_cannot_be_double_booked(client):
    assert _book(client).status_code == 201

    slots = client.get("/booking/availability", params={"date": "2025-06-21"}).json()["slots"]
    assert {s["time"]: s["available"] for s in slots}["10:00"] is False

    second = _book(client, client_name="Pedro")
    assert second.status_code == 409
    assert second.json()["detail"] == "Ese horario ya está reservado"


def test_cancelled_reservation_frees_its_slot(admin_client):
    reservation_id = _book(admin_client).json()["id"]

    response = admin_client.patch(f"/admin/reservations/{reservation_id}/status", json={"status": "cancelled"})
    assert response.status_code == 200
    assert response.json()["status"] == "cancelled"

    assert _book(admin_client, client_name="Pedro").status_code == 201


@pytest.mark.parametrize(
    "overrides, detail",
    [
        ({"reservation_date": "2025-06-19"}, "No se pueden hacer reservas para fechas pasadas"),
        ({"reservation_time": "08:00"}, "El horario seleccionado no está disponible"),
        ({"service_id": "missing"}, "Servicio no encontrado"),
    ],
)
def test_booking_rejections(client, overrides, detail):
    response = _book(client, **overrides)

    assert response.status_code == 422
    assert response.json()["detail"] == detail


def test_booking_requires_a_name(client):
    response = _book(client, client_name="  ")
    assert response.status_code == 422


def test_admin_list_is_ordered_by_date_then_time(admin_client):
    _book(admin_client, reservation_date="2025-06-22", reservation_time="09:00")
    _book(admin_client, reservation_date="2025-06-21", reservation_time="15:00")
    _book(admin_client, reservation_date="2025-06-21", reservation_time="11:00")

    data = admin_client.get("/admin/reservations").json()

    assert [(r["reservation_date"], r["reservation_time"]) for r in data] == [
        ("2025-06-21", "11:00"),
        ("2025-06-21", "15:00"),
        ("2025-06-22", "09:00"),
    ]


def test_admin_deletes_a_reservation(admin_client):
    reservation_id = _book(admin_client).json()["id"]

    assert admin_client.delete(f"/admin/reservations/{reservation_id}").status_code == 200
    assert admin_client.get("/admin/reservations").json() == []


def test_unknown_status_is_rejected(admin_client):
    reservation_id = _book(admin_client).json()["id"]
    response = admin_client.patch(f"/admin/reservations/{reservation_id}/status", json={"status": "lost"})
    assert response.status_code == 422


def test_missing_reservation_is_404(admin_client):
    assert admin_client.patch("/admin/reservations/nope/status", json={"status": "confirmed"}).status_code == 404
    assert admin_client.delete("/admin/reservations/nope").status_code == 404


def _reserve(db_session, status=ReservationStatus.PENDING):
    reservation = Reservation(
        client_name="Pedro",
        reservation_date=date(2025, 6, 21),
        reservation_time="10:00",
        status=status,
    )
    db_session.add(reservation)
    db_session.commit()
    return reservation


def test_slot_taken_between_check_and_insert_conflicts(client, db_session, monkeypatch):
    # The availability check sees a free slot, but another booking lands first
    monkeypatch.setattr(ReservationRepository, "taken_slots", lambda self, day: set())
    _reserve(db_session)

    response = _book(client)

    assert response.status_code == 409
    assert response.json()["detail"] == "Ese horario ya está reservado"
    assert db_session.query(Reservation).count() == 1


def test_store_allows_one_live_reservation_per_slot(db_session):
    _reserve(db_session, status=ReservationStatus.CANCELLED)
    _reserve(db_session)

    with pytest.raises(IntegrityError):
        _reserve(db_session)
    db_session.rollback()

    assert db_session.query(Reservation).count() == 2


def test_reactivating_into_a_taken_slot_conflicts(admin_client):
    first_id = _book(admin_client).json()["id"]
    admin_client.patch(f"/admin/reservations/{first_id}/status", json={"status": "cancelled"})
    assert _book(admin_client, client_name="Pedro").status_code == 201

    response = admin_client.patch(f"/admin/reservations/{first_id}/status", json={"status": "pending"})

    assert response.status_code == 409
    assert response.json()["detail"] == "Ese horario ya está reservado"
