from datetime import date, datetime, timedelta, timezone

import pytest

from frota.app.settings import AlertThresholds
from frota.services.alert_rules import (
    AlertKind,
    AlertSeverity,
    checklist_alert,
    days_until,
    document_alert,
    maintenance_alert,
    maintenance_schedule_alerts,
    maintenance_status,
)
from frota.services.fleet_snapshot import (
    ChecklistRecord,
    DocumentRecord,
    MaintenanceScheduleRecord,
    VehicleRecord,
)

NOW = datetime(2026, 5, 10, 9, 30, tzinfo=timezone.utc)
TODAY = NOW.date()


def _vehicle(remaining, *, vehicle_id="v1"):
    # último serviço aos 40000 km, revisão a cada 10000 km
    return VehicleRecord(
        id=vehicle_id, plate="AA-00-BB", mileage=50000 - remaining, last_service_mileage=40000
    )


def _document(days_left, *, document_id="d1"):
    return DocumentRecord(
        id=document_id,
        vehicle_id="v1",
        expiration=TODAY + timedelta(days=days_left),
        type="Seguro",
        number="123",
    )


# ----------------------------------------------------------------------
# Manutenção
# ----------------------------------------------------------------------
@pytest.mark.parametrize(
    "remaining, expected",
    [
        (-500, AlertSeverity.URGENT),
        (0, AlertSeverity.URGENT),
        (1, AlertSeverity.HIGH),
        (1000, AlertSeverity.HIGH),
        (1001, None),
    ],
)
def test_maintenance_alert_boundaries(remaining, expected):
    alert = maintenance_alert(_vehicle(remaining), now=NOW)

    if expected is None:
        assert alert is None
    else:
        assert alert.severity is expected
        assert alert.kind is AlertKind.MAINTENANCE
        assert alert.id == f"maintenance-{expected.value}-v1"
        assert alert.created_at == NOW


def test_missing_last_service_counts_as_zero():
    vehicle = VehicleRecord(id="v2", plate="CC-11-DD", mileage=9500)

    assert maintenance_status(vehicle) == "soon"
    assert maintenance_alert(vehicle, now=NOW).severity is AlertSeverity.HIGH


def test_maintenance_status_uses_configured_interval():
    thresholds = AlertThresholds(service_interval_km=15000, service_warning_km=3000)
    vehicle = VehicleRecord(id="v3", mileage=12500, last_service_mileage=0)

    assert maintenance_status(vehicle) == "urgent"
    assert maintenance_status(vehicle, thresholds) == "soon"


def test_urgent_maintenance_message_mentions_plate_and_overrun():
    alert = maintenance_alert(_vehicle(-1500), now=NOW)

    assert "AA-00-BB" in alert.message
    assert "1.500 km" in alert.details


# ----------------------------------------------------------------------
# Documentos
# ----------------------------------------------------------------------
@pytest.mark.parametrize(
    "days_left, expected",
    [
        (-1, AlertSeverity.URGENT),
        (0, AlertSeverity.HIGH),
        (30, AlertSeverity.HIGH),
        (31, AlertSeverity.MEDIUM),
        (60, AlertSeverity.MEDIUM),
        (61, None),
    ],
)
def test_document_alert_windows(days_left, expected):
    alert = document_alert(_document(days_left), vehicle=_vehicle(5000), now=NOW)

    if expected is None:
        assert alert is None
    else:
        assert alert.severity is expected
        assert alert.id == f"document-{expected.value}-d1"
        assert alert.resource_id == "d1"


def test_document_alert_is_dated_at_expiration():
    document = _document(10)

    alert = document_alert(document, now=NOW)

    assert alert.created_at == datetime.combine(
        document.expiration, datetime.min.time(), tzinfo=timezone.utc
    )


def test_expired_document_is_dated_at_expiration_not_now():
    document = _document(-5)

    alert = document_alert(document, now=NOW)

    assert alert.severity is AlertSeverity.URGENT
    assert alert.created_at == datetime(2026, 5, 5, tzinfo=timezone.utc)


def test_document_without_vehicle_uses_placeholder_plate():
    alert = document_alert(_document(-3), vehicle=None, now=NOW)
    assert "N/D" in alert.message
    assert "3 dias" in alert.details


def test_days_until_rounds_partial_days_up():
    expiration = datetime(2026, 5, 10, 18, 0, tzinfo=timezone.utc)

    assert days_until(expiration, TODAY) == 1
    assert days_until(date(2026, 5, 9), TODAY) == -1
    assert days_until(TODAY, TODAY) == 0


# ----------------------------------------------------------------------
# Checklists
# ----------------------------------------------------------------------
@pytest.mark.parametrize("issues", [None, "", "   ", "\n\t"])
def test_blank_checklist_issue_yields_nothing(issues):
    checklist = ChecklistRecord(id="c1", vehicle_id="v1", issues_to_address=issues)
    assert checklist_alert(checklist, now=NOW) is None


def test_checklist_issue_keeps_original_text():
    created = datetime(2026, 5, 9, 7, 0, tzinfo=timezone.utc)
    checklist = ChecklistRecord(
        id="c1",
        vehicle_id="v1",
        date=date(2026, 5, 9),
        issues_to_address=" leak ",
        created_at=created,
    )

    alert = checklist_alert(checklist, vehicle=_vehicle(5000), now=NOW)

    assert alert.severity is AlertSeverity.HIGH
    assert alert.kind is AlertKind.CHECKLIST_ISSUE
    assert alert.id == "checklist_issue-high-c1"
    assert alert.details == " leak "
    assert alert.created_at == created
    assert "09/05/2026" in alert.message


def test_checklist_without_created_at_uses_reference_clock():
    checklist = ChecklistRecord(id="c2", vehicle_id="v1", issues_to_address="pneu furado")
    assert checklist_alert(checklist, now=NOW).created_at == NOW


# ----------------------------------------------------------------------
# Planos de manutenção
# ----------------------------------------------------------------------
def test_schedule_alerts_by_date_and_mileage():
    vehicle = VehicleRecord(id="v1", plate="AA-00-BB", mileage=59500)
    schedule = MaintenanceScheduleRecord(
        id="s1",
        task_type="Troca de óleo",
        vehicle_id="v1",
        next_due_date=TODAY - timedelta(days=2),
        next_due_mileage=60000,
    )

    alerts = maintenance_schedule_alerts(schedule, vehicle=vehicle, now=NOW)

    assert [a.id for a in alerts] == [
        "maintenance_schedule-date-urgent-s1",
        "maintenance_schedule-mileage-high-s1",
    ]
    assert all(a.kind is AlertKind.MAINTENANCE_SCHEDULE for a in alerts)
    assert "Troca de óleo" in alerts[0].message


def test_generic_schedule_is_only_checked_by_date():
    schedule = MaintenanceScheduleRecord(
        id="s2",
        task_type="Inspeção",
        vehicle_type="Camião",
        next_due_date=TODAY + timedelta(days=45),
        next_due_mileage=1000,
    )

    alerts = maintenance_schedule_alerts(schedule, vehicle=None, now=NOW)

    assert len(alerts) == 1
    assert alerts[0].severity is AlertSeverity.MEDIUM
    assert "Camião" in alerts[0].message


def test_distant_schedule_yields_nothing():
    vehicle = VehicleRecord(id="v1", mileage=10000)
    schedule = MaintenanceScheduleRecord(
        id="s3",
        vehicle_id="v1",
        next_due_date=TODAY + timedelta(days=90),
        next_due_mileage=20000,
    )

    assert maintenance_schedule_alerts(schedule, vehicle=vehicle, now=NOW) == []


def test_to_dict_is_json_friendly():
    alert = maintenance_alert(_vehicle(0), now=NOW)

    payload = alert.to_dict()

    assert payload["kind"] == "maintenance"
    assert payload["severity"] == "urgent"
    assert payload["created_at"] == NOW.isoformat()
