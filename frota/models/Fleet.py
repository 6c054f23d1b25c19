"""Entidades da frota consumidas pelas regras de alerta.

Só os campos usados pelas regras e pela apresentação dos alertas são
modelados; o restante cadastro vive no backend de dados.
"""

from datetime import datetime, timezone
from uuid import uuid4

from frota.app import db


def _uuid() -> str:
    return str(uuid4())


def _now():
    return datetime.now(timezone.utc)


class Vehicle(db.Model):
    __tablename__ = "vehicle"

    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    plate = db.Column(db.String(20), nullable=False)
    type = db.Column(db.String(50))
    status = db.Column(db.String(30))
    mileage = db.Column(db.Integer, nullable=False, default=0)
    last_service_date = db.Column(db.Date)
    last_service_mileage = db.Column(db.Integer, nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), default=_now)

    documents = db.relationship(
        "Document",
        backref="vehicle",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<Vehicle {self.plate} mileage={self.mileage}>"


class Driver(db.Model):
    __tablename__ = "driver"

    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    name = db.Column(db.String(120), nullable=False)
    license = db.Column(db.String(50))
    status = db.Column(db.String(30))
    created_at = db.Column(db.DateTime(timezone=True), default=_now)


class Document(db.Model):
    __tablename__ = "document"

    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    vehicle_id = db.Column(db.String(36), db.ForeignKey("vehicle.id"), nullable=False, index=True)
    type = db.Column(db.String(50))
    number = db.Column(db.String(80))
    expiration = db.Column(db.Date, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=_now)


class PreDepartureChecklist(db.Model):
    __tablename__ = "pre_departure_checklist"

    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    vehicle_id = db.Column(db.String(36), db.ForeignKey("vehicle.id"), nullable=False, index=True)
    driver_id = db.Column(db.String(36), db.ForeignKey("driver.id"), nullable=True)
    date = db.Column(db.Date, nullable=False)
    issues_to_address = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), default=_now)


class MaintenanceSchedule(db.Model):
    __tablename__ = "maintenance_schedule"

    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    vehicle_id = db.Column(db.String(36), db.ForeignKey("vehicle.id"), nullable=True, index=True)
    vehicle_type = db.Column(db.String(50))
    task_type = db.Column(db.String(80), nullable=False)
    next_due_date = db.Column(db.Date, nullable=True)
    next_due_mileage = db.Column(db.Integer, nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), default=_now)
