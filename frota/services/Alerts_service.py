"""Alert derivation over a fleet snapshot."""

from __future__ import annotations

from collections import Counter, OrderedDict
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

from frota.app.settings import AlertThresholds
from frota.services.alert_rules import (
    DEFAULT_THRESHOLDS,
    SEVERITY_ORDER,
    AlertSeverity,
    FleetAlert,
    checklist_alert,
    document_alert,
    maintenance_alert,
    maintenance_schedule_alerts,
)
from frota.services.fleet_snapshot import FleetSnapshot
from frota.utils.dates import as_utc
from frota.utils.logs import logger


def derive_alerts(
    snapshot: FleetSnapshot,
    *,
    thresholds: AlertThresholds = DEFAULT_THRESHOLDS,
    now: Optional[datetime] = None,
) -> List[FleetAlert]:
    """Apply every rule to the snapshot and return the alerts newest first.

    Emission order is maintenance, documents, checklist issues, then
    maintenance schedules; ``sorted`` is stable, so alerts sharing a
    ``created_at`` keep that order.
    """

    current = as_utc(now) if now is not None else datetime.now(timezone.utc)
    generated: List[FleetAlert] = []

    for vehicle in snapshot.vehicles:
        alert = maintenance_alert(vehicle, thresholds=thresholds, now=current)
        if alert is not None:
            generated.append(alert)

    for document in snapshot.documents:
        alert = document_alert(
            document,
            vehicle=snapshot.vehicle(document.vehicle_id),
            thresholds=thresholds,
            now=current,
        )
        if alert is not None:
            generated.append(alert)

    for checklist in snapshot.checklists:
        alert = checklist_alert(checklist, vehicle=snapshot.vehicle(checklist.vehicle_id), now=current)
        if alert is not None:
            generated.append(alert)

    for schedule in snapshot.maintenance_schedules:
        generated.extend(
            maintenance_schedule_alerts(
                schedule,
                vehicle=snapshot.vehicle(schedule.vehicle_id),
                thresholds=thresholds,
                now=current,
            )
        )

    return sorted(generated, key=lambda alert: alert.created_at, reverse=True)


def group_by_severity(alerts: Iterable[FleetAlert]) -> "OrderedDict[AlertSeverity, List[FleetAlert]]":
    """Group a sorted alert list for the banner: urgent, high, then medium."""

    groups: "OrderedDict[AlertSeverity, List[FleetAlert]]" = OrderedDict(
        (severity, []) for severity in SEVERITY_ORDER
    )
    for alert in alerts:
        groups[alert.severity].append(alert)
    return groups


def summarize(alerts: Iterable[FleetAlert]) -> Dict[str, int]:
    counts = Counter(alert.severity for alert in alerts)
    summary = {severity.value: counts.get(severity, 0) for severity in SEVERITY_ORDER}
    summary["total"] = sum(counts.values())
    return summary


class AlertDerivationEngine:
    """Recomputes the alert list on demand from an injected snapshot.

    The engine never fetches data: callers hand it a snapshot and call
    :meth:`replace_snapshot` when they decide the data is stale.  Each call
    to :meth:`derive` is a full, independent recomputation.
    """

    def __init__(
        self,
        snapshot: Optional[FleetSnapshot] = None,
        *,
        thresholds: AlertThresholds = DEFAULT_THRESHOLDS,
    ) -> None:
        self.snapshot = snapshot or FleetSnapshot()
        self.thresholds = thresholds

    def replace_snapshot(self, snapshot: FleetSnapshot) -> None:
        self.snapshot = snapshot

    def derive(self, now: Optional[datetime] = None) -> List[FleetAlert]:
        alerts = derive_alerts(self.snapshot, thresholds=self.thresholds, now=now)
        logger.debug("Alertas derivados: %s", summarize(alerts))
        return alerts


__all__ = ["AlertDerivationEngine", "derive_alerts", "group_by_severity", "summarize"]
