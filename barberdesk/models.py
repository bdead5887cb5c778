import enum
import uuid

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func, text

from .database import Base


def generate_id():
    """Generate a UUID primary key"""
    return str(uuid.uuid4())


class ReservationStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class AdminProfile(Base):
    """Marks an identity-provider user as an administrator"""

    __tablename__ = "admin_profiles"

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(64), unique=True, index=True, nullable=False)
    full_name = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )


class Client(Base):
    __tablename__ = "clients"
    __table_args__ = (UniqueConstraint("id_number", name="clients_id_number_key"),)

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(100), nullable=False)
    id_number = Column(String(20), nullable=False)  # Cédula / RUC
    phone = Column(String(20), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )


class Service(Base):
    """Catalog entry shown on the public services page"""

    __tablename__ = "services"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(12, 2), nullable=True)
    duration_minutes = Column(Integer, nullable=True)
    image_url = Column(String(500), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )


class Reservation(Base):
    __tablename__ = "reservations"
    # One live reservation per slot; cancelled ones free it
    __table_args__ = (
        Index(
            "reservations_slot_key",
            "reservation_date",
            "reservation_time",
            unique=True,
            postgresql_where=text("status <> 'cancelled'"),
            sqlite_where=text("status <> 'cancelled'"),
        ),
    )

    id = Column(String(36), primary_key=True, default=generate_id)
    client_name = Column(String(100), nullable=False)
    client_phone = Column(String(20), nullable=True)
    reservation_date = Column(Date, nullable=False, index=True)
    reservation_time = Column(String(5), nullable=False)  # HH:MM
    service_id = Column(String(36), ForeignKey("services.id", ondelete="SET NULL"), nullable=True)
    status = Column(
        Enum(
            ReservationStatus,
            name="reservation_status",
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        default=ReservationStatus.PENDING,
        nullable=False,
    )
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    service = relationship("Service")


class WorkRecord(Base):
    """A single billable service event in the work registry"""

    __tablename__ = "work_registry"

    id = Column(String(36), primary_key=True, default=generate_id)
    service_date = Column(Date, nullable=False, index=True)
    # Weak back-reference: deleting a client keeps the record and clears the link
    client_id = Column(String(36), ForeignKey("clients.id", ondelete="SET NULL"), nullable=True)
    client_name = Column(String(100), nullable=True)  # Walk-in fallback when no client_id
    service_description = Column(String(500), nullable=False)
    amount_charged = Column(Numeric(12, 2), nullable=False)
    notes = Column(String(500), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    client = relationship("Client")
