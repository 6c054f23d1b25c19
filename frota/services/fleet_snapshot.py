"""Read-only snapshot of the fleet collections consumed by the alert rules.

Records are plain frozen dataclasses so that a derivation never touches the
ORM session.  A snapshot is built either from the database
(:func:`load_fleet_snapshot`) or from the JSON collections returned by the
hosted data backend (:meth:`FleetSnapshot.from_payload`).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from sqlalchemy.orm import Session

from frota.repository.Fleet_repository import (
    ChecklistRepo,
    DocumentRepo,
    DriverRepo,
    MaintenanceScheduleRepo,
    VehicleRepo,
)
from frota.utils.dates import parse_date, parse_timestamp
from frota.utils.logs import logger


def _optional_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    return int(value)


@dataclass(frozen=True)
class VehicleRecord:
    id: str
    plate: str = ""
    mileage: int = 0
    last_service_mileage: Optional[int] = None

    @classmethod
    def from_model(cls, vehicle) -> "VehicleRecord":
        return cls(
            id=str(vehicle.id),
            plate=vehicle.plate or "",
            mileage=vehicle.mileage or 0,
            last_service_mileage=vehicle.last_service_mileage,
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "VehicleRecord":
        return cls(
            id=str(data["id"]),
            plate=data.get("plate") or "",
            mileage=_optional_int(data.get("mileage")) or 0,
            last_service_mileage=_optional_int(data.get("last_service_mileage")),
        )


@dataclass(frozen=True)
class DriverRecord:
    id: str
    name: str = ""

    @classmethod
    def from_model(cls, driver) -> "DriverRecord":
        return cls(id=str(driver.id), name=driver.name or "")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "DriverRecord":
        return cls(id=str(data["id"]), name=data.get("name") or "")


@dataclass(frozen=True)
class DocumentRecord:
    id: str
    vehicle_id: Optional[str]
    expiration: Optional[date]
    type: str = ""
    number: str = ""

    @classmethod
    def from_model(cls, document) -> "DocumentRecord":
        return cls(
            id=str(document.id),
            vehicle_id=document.vehicle_id,
            expiration=document.expiration,
            type=document.type or "",
            number=document.number or "",
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "DocumentRecord":
        return cls(
            id=str(data["id"]),
            vehicle_id=data.get("vehicle_id"),
            expiration=parse_date(data.get("expiration")),
            type=data.get("type") or "",
            number=data.get("number") or "",
        )


@dataclass(frozen=True)
class ChecklistRecord:
    id: str
    vehicle_id: Optional[str]
    date: Optional[date] = None
    driver_id: Optional[str] = None
    issues_to_address: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, checklist) -> "ChecklistRecord":
        return cls(
            id=str(checklist.id),
            vehicle_id=checklist.vehicle_id,
            date=checklist.date,
            driver_id=checklist.driver_id,
            issues_to_address=checklist.issues_to_address,
            created_at=parse_timestamp(checklist.created_at),
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ChecklistRecord":
        return cls(
            id=str(data["id"]),
            vehicle_id=data.get("vehicle_id"),
            date=parse_date(data.get("date")),
            driver_id=data.get("driver_id"),
            issues_to_address=data.get("issues_to_address"),
            created_at=parse_timestamp(data.get("created_at")),
        )


@dataclass(frozen=True)
class MaintenanceScheduleRecord:
    id: str
    task_type: str = ""
    vehicle_id: Optional[str] = None
    vehicle_type: Optional[str] = None
    next_due_date: Optional[date] = None
    next_due_mileage: Optional[int] = None

    @classmethod
    def from_model(cls, schedule) -> "MaintenanceScheduleRecord":
        return cls(
            id=str(schedule.id),
            task_type=schedule.task_type or "",
            vehicle_id=schedule.vehicle_id,
            vehicle_type=schedule.vehicle_type,
            next_due_date=schedule.next_due_date,
            next_due_mileage=schedule.next_due_mileage,
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "MaintenanceScheduleRecord":
        return cls(
            id=str(data["id"]),
            task_type=data.get("task_type") or "",
            vehicle_id=data.get("vehicle_id"),
            vehicle_type=data.get("vehicle_type"),
            next_due_date=parse_date(data.get("next_due_date")),
            next_due_mileage=_optional_int(data.get("next_due_mileage")),
        )


@dataclass(frozen=True)
class FleetSnapshot:
    vehicles: Tuple[VehicleRecord, ...] = ()
    documents: Tuple[DocumentRecord, ...] = ()
    checklists: Tuple[ChecklistRecord, ...] = ()
    maintenance_schedules: Tuple[MaintenanceScheduleRecord, ...] = ()
    drivers: Tuple[DriverRecord, ...] = ()
    _vehicles_by_id: Dict[str, VehicleRecord] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        # aceita listas, mas guarda sempre tuplos
        for name in ("vehicles", "documents", "checklists", "maintenance_schedules", "drivers"):
            object.__setattr__(self, name, tuple(getattr(self, name) or ()))
        object.__setattr__(self, "_vehicles_by_id", {v.id: v for v in self.vehicles})

    def vehicle(self, vehicle_id: Optional[str]) -> Optional[VehicleRecord]:
        if vehicle_id is None:
            return None
        return self._vehicles_by_id.get(str(vehicle_id))

    @property
    def is_empty(self) -> bool:
        return not (self.vehicles or self.documents or self.checklists or self.maintenance_schedules)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Sequence[Mapping[str, Any]]]) -> "FleetSnapshot":
        """Build a snapshot from the collections returned by the data backend.

        Keys follow the backend table names; missing collections are empty.
        """

        return cls(
            vehicles=[VehicleRecord.from_mapping(item) for item in payload.get("vehicles") or ()],
            documents=[DocumentRecord.from_mapping(item) for item in payload.get("documents") or ()],
            checklists=[
                ChecklistRecord.from_mapping(item)
                for item in payload.get("pre_departure_checklists") or ()
            ],
            maintenance_schedules=[
                MaintenanceScheduleRecord.from_mapping(item)
                for item in payload.get("maintenance_schedules") or ()
            ],
            drivers=[DriverRecord.from_mapping(item) for item in payload.get("drivers") or ()],
        )


def load_fleet_snapshot(session: Optional[Session] = None) -> FleetSnapshot:
    """Read every fleet collection once and freeze it into a snapshot."""

    snapshot = FleetSnapshot(
        vehicles=[VehicleRecord.from_model(v) for v in VehicleRepo(session=session).list_all()],
        documents=[DocumentRecord.from_model(d) for d in DocumentRepo(session=session).list_all()],
        checklists=[ChecklistRecord.from_model(c) for c in ChecklistRepo(session=session).list_all()],
        maintenance_schedules=[
            MaintenanceScheduleRecord.from_model(s)
            for s in MaintenanceScheduleRepo(session=session).list_all()
        ],
        drivers=[DriverRecord.from_model(d) for d in DriverRepo(session=session).list_all()],
    )
    logger.debug(
        "Snapshot da frota: %d veículos, %d documentos, %d checklists, %d planos",
        len(snapshot.vehicles),
        len(snapshot.documents),
        len(snapshot.checklists),
        len(snapshot.maintenance_schedules),
    )
    return snapshot


__all__ = [
    "ChecklistRecord",
    "DocumentRecord",
    "DriverRecord",
    "FleetSnapshot",
    "MaintenanceScheduleRecord",
    "VehicleRecord",
    "load_fleet_snapshot",
]
