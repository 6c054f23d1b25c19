from datetime import date, datetime, timedelta, timezone

import pytest
from sqlalchemy import text

from frota.models.Fleet import Document, PreDepartureChecklist, Vehicle
from frota.models.Permissions import Action, Resource, Role


@pytest.fixture
def fleet(db):
    today = datetime.now(timezone.utc).date()
    vehicle = Vehicle(plate="AA-00-BB", mileage=52000, last_service_mileage=42000)
    db.session.add(vehicle)
    db.session.flush()
    db.session.add_all(
        [
            Document(vehicle_id=vehicle.id, type="Seguro", expiration=today + timedelta(days=10)),
            PreDepartureChecklist(
                vehicle_id=vehicle.id, date=today, issues_to_address="brake pad worn"
            ),
            PreDepartureChecklist(vehicle_id=vehicle.id, date=today, issues_to_address="   "),
        ]
    )
    db.session.commit()
    return vehicle


@pytest.fixture
def viewer(make_user, login, permission_authority):
    permission_authority.update_permission(
        Role.STANDARD_USER, Resource.VEHICLES, Action.VIEW, True, actor_role=Role.ADMIN
    )
    return login(make_user("motorista"))


def test_alerts_require_login(client, permission_authority):
    assert client.get("/api/alerts").status_code == 401


def test_alerts_require_vehicle_view_grant(client, permission_authority, make_user, login):
    login(make_user("sem_acesso"))
    assert client.get("/api/alerts").status_code == 403


def test_alerts_are_derived_from_the_database(client, fleet, viewer):
    response = client.get("/api/alerts")

    assert response.status_code == 200
    payload = response.get_json()
    assert payload["summary"] == {"urgent": 1, "high": 2, "medium": 0, "total": 3}
    # documento datado da expiração, manutenção do pedido, checklist da gravação
    assert [alert["kind"] for alert in payload["alerts"]] == [
        "document",
        "maintenance",
        "checklist_issue",
    ]
    assert payload["groups"]["urgent"] == [f"maintenance-urgent-{fleet.id}"]


def test_alerts_can_be_filtered_by_severity(client, fleet, viewer):
    payload = client.get("/api/alerts?severity=urgent").get_json()

    assert [alert["severity"] for alert in payload["alerts"]] == ["urgent"]
    assert payload["summary"]["total"] == 1


def test_unknown_severity_is_rejected(client, fleet, viewer):
    assert client.get("/api/alerts?severity=critical").status_code == 400


def test_empty_fleet_has_no_alerts(client, viewer):
    payload = client.get("/api/alerts").get_json()
    assert payload["alerts"] == []
    assert payload["summary"]["total"] == 0


def test_maintenance_status_endpoint(client, fleet, viewer):
    payload = client.get("/api/alerts/maintenance-status").get_json()

    assert payload["vehicles"] == [
        {"id": fleet.id, "plate": "AA-00-BB", "status": "urgent", "remaining_km": 0}
    ]


def test_fleet_store_failure_is_reported_not_hidden(client, fleet, viewer, db):
    db.session.execute(text("DROP TABLE maintenance_schedule"))
    db.session.commit()

    alerts = client.get("/api/alerts")
    status = client.get("/api/alerts/maintenance-status")

    assert alerts.status_code == 503
    assert "message" in alerts.get_json()
    assert status.status_code == 503
