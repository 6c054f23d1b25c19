"""Alertas operacionais derivados do estado atual da frota."""
from __future__ import annotations

from flask import Blueprint, jsonify, request
from flask_login import login_required
from sqlalchemy.exc import SQLAlchemyError

from frota.app.settings import get_app_settings
from frota.models.Permissions import Action, Resource
from frota.services.Alerts_service import AlertDerivationEngine, group_by_severity, summarize
from frota.services.alert_rules import AlertSeverity, maintenance_status, remaining_service_km
from frota.services.fleet_snapshot import load_fleet_snapshot
from frota.utils.logs import logger
from frota.utils.role.roles import permission_required

from .common import error_response

alerts_api_bp = Blueprint("api_alerts", __name__)

FLEET_UNAVAILABLE = "Dados da frota indisponíveis; não é possível calcular alertas."


@alerts_api_bp.route("", methods=["GET"])
@login_required
@permission_required(Resource.VEHICLES, Action.VIEW)
def list_alerts():
    severity_filter = request.args.get("severity")
    if severity_filter:
        try:
            severity_filter = AlertSeverity(severity_filter.strip().lower())
        except ValueError:
            return error_response(f"Severidade inválida: {severity_filter}", 400)

    try:
        snapshot = load_fleet_snapshot()
    except SQLAlchemyError:
        # base indisponível não é o mesmo que frota sem alertas
        logger.error("Falha ao ler a frota para derivar alertas")
        return error_response(FLEET_UNAVAILABLE, 503)

    engine = AlertDerivationEngine(snapshot, thresholds=get_app_settings().alerts)
    alerts = engine.derive()
    if severity_filter:
        alerts = [alert for alert in alerts if alert.severity is severity_filter]

    return jsonify(
        {
            "alerts": [alert.to_dict() for alert in alerts],
            "groups": {
                severity.value: [alert.id for alert in group]
                for severity, group in group_by_severity(alerts).items()
            },
            "summary": summarize(alerts),
        }
    )


@alerts_api_bp.route("/maintenance-status", methods=["GET"])
@login_required
@permission_required(Resource.VEHICLES, Action.VIEW)
def vehicle_maintenance_status():
    thresholds = get_app_settings().alerts
    try:
        snapshot = load_fleet_snapshot()
    except SQLAlchemyError:
        logger.error("Falha ao ler a frota para o estado de manutenção")
        return error_response(FLEET_UNAVAILABLE, 503)

    return jsonify(
        {
            "vehicles": [
                {
                    "id": vehicle.id,
                    "plate": vehicle.plate,
                    "status": maintenance_status(vehicle, thresholds),
                    "remaining_km": remaining_service_km(vehicle, thresholds),
                }
                for vehicle in snapshot.vehicles
            ]
        }
    )


__all__ = ["alerts_api_bp"]
