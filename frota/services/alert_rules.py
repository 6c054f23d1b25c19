"""Pure threshold rules mapping fleet records to operational alerts.

Every rule takes one record (plus the threshold policy and a reference
clock) and returns an alert or ``None``.  Rules never raise for well formed
records: missing optional fields fall back to neutral defaults.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

from frota.app.settings import AlertThresholds
from frota.utils.dates import as_utc, start_of_day

DEFAULT_THRESHOLDS = AlertThresholds()
UNKNOWN_PLATE = "N/D"


class AlertKind(str, enum.Enum):
    MAINTENANCE = "maintenance"
    DOCUMENT = "document"
    CHECKLIST_ISSUE = "checklist_issue"
    MAINTENANCE_SCHEDULE = "maintenance_schedule"


class AlertSeverity(str, enum.Enum):
    URGENT = "urgent"
    HIGH = "high"
    MEDIUM = "medium"


SEVERITY_ORDER = (AlertSeverity.URGENT, AlertSeverity.HIGH, AlertSeverity.MEDIUM)


@dataclass(frozen=True)
class FleetAlert:
    id: str
    kind: AlertKind
    severity: AlertSeverity
    message: str
    details: Optional[str]
    resource_id: str
    created_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "kind": self.kind.value,
            "severity": self.severity.value,
            "message": self.message,
            "details": self.details,
            "resource_id": self.resource_id,
            "created_at": self.created_at.isoformat(),
        }


def alert_id(kind: AlertKind, severity: AlertSeverity, resource_id: str, basis: Optional[str] = None) -> str:
    parts = [kind.value]
    if basis:
        parts.append(basis)
    parts.extend([severity.value, str(resource_id)])
    return "-".join(parts)


def _format_km(value: int) -> str:
    return f"{value:,}".replace(",", ".")


def _resolve_now(now: Optional[datetime]) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    return as_utc(now)


def days_until(target: date, today: date) -> int:
    """Whole days from ``today`` until ``target``; negative once it has passed.

    Bare dates give the calendar difference.  When ``target`` carries a time
    of day, the remaining partial day counts as a full day.
    """

    if isinstance(target, datetime):
        delta = as_utc(target) - start_of_day(today)
        return math.ceil(delta.total_seconds() / 86400)
    if isinstance(today, datetime):
        today = as_utc(today).date()
    return (target - today).days


def _tier_by_days(days_left: int, high_days: int, medium_days: int) -> Optional[AlertSeverity]:
    if days_left < 0:
        return AlertSeverity.URGENT
    if days_left <= high_days:
        return AlertSeverity.HIGH
    if days_left <= medium_days:
        return AlertSeverity.MEDIUM
    return None


# ----------------------------------------------------------------------
# Manutenção por quilometragem
# ----------------------------------------------------------------------
def remaining_service_km(vehicle, thresholds: AlertThresholds = DEFAULT_THRESHOLDS) -> int:
    last_service = getattr(vehicle, "last_service_mileage", None) or 0
    mileage = getattr(vehicle, "mileage", None) or 0
    return (last_service + thresholds.service_interval_km) - mileage


def maintenance_status(vehicle, thresholds: AlertThresholds = DEFAULT_THRESHOLDS) -> str:
    """Estado de revisão do veículo: ``urgent``, ``soon`` ou ``ok``."""

    remaining = remaining_service_km(vehicle, thresholds)
    if remaining <= 0:
        return "urgent"
    if remaining <= thresholds.service_warning_km:
        return "soon"
    return "ok"


def maintenance_alert(
    vehicle,
    *,
    thresholds: AlertThresholds = DEFAULT_THRESHOLDS,
    now: Optional[datetime] = None,
) -> Optional[FleetAlert]:
    status = maintenance_status(vehicle, thresholds)
    if status == "ok":
        return None

    remaining = remaining_service_km(vehicle, thresholds)
    plate = getattr(vehicle, "plate", None) or UNKNOWN_PLATE
    if status == "urgent":
        severity = AlertSeverity.URGENT
        message = f"Manutenção URGENTE para {plate}!"
        details = f"O veículo ultrapassou a revisão em {_format_km(abs(remaining))} km."
    else:
        severity = AlertSeverity.HIGH
        message = f"Manutenção próxima para {plate}."
        details = f"Faltam {_format_km(remaining)} km para a próxima revisão."

    return FleetAlert(
        id=alert_id(AlertKind.MAINTENANCE, severity, vehicle.id),
        kind=AlertKind.MAINTENANCE,
        severity=severity,
        message=message,
        details=details,
        resource_id=str(vehicle.id),
        created_at=_resolve_now(now),
    )


# ----------------------------------------------------------------------
# Documentos a expirar
# ----------------------------------------------------------------------
def document_alert(
    document,
    *,
    vehicle=None,
    thresholds: AlertThresholds = DEFAULT_THRESHOLDS,
    now: Optional[datetime] = None,
) -> Optional[FleetAlert]:
    expiration = getattr(document, "expiration", None)
    if expiration is None:
        return None

    today = _resolve_now(now).date()
    days_left = days_until(expiration, today)
    severity = _tier_by_days(days_left, thresholds.document_high_days, thresholds.document_medium_days)
    if severity is None:
        return None

    doc_type = getattr(document, "type", None) or "Documento"
    number = getattr(document, "number", None) or "-"
    plate = getattr(vehicle, "plate", None) or UNKNOWN_PLATE
    if severity is AlertSeverity.URGENT:
        message = f"Documento expirado: {doc_type} de {plate}!"
        details = f"O documento n.º {number} expirou há {abs(days_left)} dias."
    elif severity is AlertSeverity.HIGH:
        message = f"Documento a renovar: {doc_type} de {plate}."
        details = f"O documento n.º {number} expira em {days_left} dias."
    else:
        message = f"Documento a acompanhar: {doc_type} de {plate}."
        details = f"O documento n.º {number} expira em {days_left} dias."

    return FleetAlert(
        id=alert_id(AlertKind.DOCUMENT, severity, document.id),
        kind=AlertKind.DOCUMENT,
        severity=severity,
        message=message,
        details=details,
        resource_id=str(document.id),
        # datado da expiração para que documentos antigos não pareçam novos
        created_at=start_of_day(expiration),
    )


# ----------------------------------------------------------------------
# Problemas reportados nas checklists de pré-partida
# ----------------------------------------------------------------------
def checklist_alert(
    checklist,
    *,
    vehicle=None,
    now: Optional[datetime] = None,
) -> Optional[FleetAlert]:
    issues = getattr(checklist, "issues_to_address", None)
    if issues is None or not str(issues).strip():
        return None

    plate = getattr(vehicle, "plate", None) or UNKNOWN_PLATE
    checklist_date = getattr(checklist, "date", None)
    label = checklist_date.strftime("%d/%m/%Y") if checklist_date else "-"
    created_at = getattr(checklist, "created_at", None)

    return FleetAlert(
        id=alert_id(AlertKind.CHECKLIST_ISSUE, AlertSeverity.HIGH, checklist.id),
        kind=AlertKind.CHECKLIST_ISSUE,
        severity=AlertSeverity.HIGH,
        message=f"Problema detetado na checklist de {label} para {plate}.",
        details=str(issues),
        resource_id=str(checklist.id),
        created_at=as_utc(created_at) if created_at else _resolve_now(now),
    )


# ----------------------------------------------------------------------
# Planos de manutenção (por data e por quilometragem)
# ----------------------------------------------------------------------
def maintenance_schedule_alerts(
    schedule,
    *,
    vehicle=None,
    thresholds: AlertThresholds = DEFAULT_THRESHOLDS,
    now: Optional[datetime] = None,
) -> List[FleetAlert]:
    """Up to two alerts per schedule: one by due date, one by due mileage.

    The mileage check needs the related vehicle; generic schedules (no
    vehicle) are only checked by date.
    """

    alerts: List[FleetAlert] = []
    current = _resolve_now(now)
    task = getattr(schedule, "task_type", None) or "Manutenção"
    target = (
        getattr(vehicle, "plate", None)
        or getattr(schedule, "vehicle_type", None)
        or "Veículo genérico"
    )

    due_date = getattr(schedule, "next_due_date", None)
    if due_date is not None:
        days_left = days_until(due_date, current.date())
        severity = _tier_by_days(days_left, thresholds.schedule_high_days, thresholds.schedule_medium_days)
        if severity is not None:
            if severity is AlertSeverity.URGENT:
                details = f"Prazo ultrapassado há {abs(days_left)} dias."
            else:
                details = f"Prazo em {days_left} dias."
            alerts.append(
                FleetAlert(
                    id=alert_id(AlertKind.MAINTENANCE_SCHEDULE, severity, schedule.id, basis="date"),
                    kind=AlertKind.MAINTENANCE_SCHEDULE,
                    severity=severity,
                    message=_schedule_message(severity, task, target),
                    details=details,
                    resource_id=str(schedule.id),
                    created_at=start_of_day(due_date),
                )
            )

    due_mileage = getattr(schedule, "next_due_mileage", None)
    if due_mileage and vehicle is not None:
        remaining = due_mileage - (getattr(vehicle, "mileage", None) or 0)
        if remaining <= 0:
            severity = AlertSeverity.URGENT
            details = f"Quilometragem ultrapassada em {_format_km(abs(remaining))} km."
        elif remaining <= thresholds.schedule_high_km:
            severity = AlertSeverity.HIGH
            details = f"Faltam {_format_km(remaining)} km para o prazo."
        elif remaining <= thresholds.schedule_medium_km:
            severity = AlertSeverity.MEDIUM
            details = f"Faltam {_format_km(remaining)} km para o prazo."
        else:
            severity = None
        if severity is not None:
            alerts.append(
                FleetAlert(
                    id=alert_id(AlertKind.MAINTENANCE_SCHEDULE, severity, schedule.id, basis="mileage"),
                    kind=AlertKind.MAINTENANCE_SCHEDULE,
                    severity=severity,
                    message=_schedule_message(severity, task, target),
                    details=details,
                    resource_id=str(schedule.id),
                    created_at=current,
                )
            )

    return alerts


def _schedule_message(severity: AlertSeverity, task: str, target: str) -> str:
    if severity is AlertSeverity.URGENT:
        return f"Manutenção planeada URGENTE: {task} para {target}!"
    if severity is AlertSeverity.HIGH:
        return f"Manutenção planeada próxima: {task} para {target}."
    return f"Manutenção planeada a acompanhar: {task} para {target}."


__all__ = [
    "AlertKind",
    "AlertSeverity",
    "DEFAULT_THRESHOLDS",
    "FleetAlert",
    "SEVERITY_ORDER",
    "alert_id",
    "checklist_alert",
    "days_until",
    "document_alert",
    "maintenance_alert",
    "maintenance_schedule_alerts",
    "maintenance_status",
    "remaining_service_km",
]
