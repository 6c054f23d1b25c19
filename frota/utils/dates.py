"""Normalização de datas e timestamps vindos do backend de dados."""

from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Any, Optional


def as_utc(value: datetime) -> datetime:
    """Datetimes sem fuso são interpretados como UTC."""

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def start_of_day(value: date) -> datetime:
    if isinstance(value, datetime):
        value = as_utc(value).date()
    return datetime.combine(value, time.min, tzinfo=timezone.utc)


def parse_timestamp(raw_ts: Any) -> Optional[datetime]:
    """Normalises timestamps received as datetimes, epoch numbers or ISO strings."""

    if raw_ts is None:
        return None
    if isinstance(raw_ts, datetime):
        return as_utc(raw_ts)
    if isinstance(raw_ts, date):
        return start_of_day(raw_ts)
    if isinstance(raw_ts, (int, float)):
        return datetime.fromtimestamp(raw_ts, tz=timezone.utc)
    if isinstance(raw_ts, str):
        normalized = raw_ts.strip()
        if not normalized:
            return None
        if normalized.endswith("Z"):
            normalized = normalized[:-1] + "+00:00"
        try:
            return as_utc(datetime.fromisoformat(normalized))
        except ValueError as exc:
            raise ValueError(f"timestamp inválido: {raw_ts}") from exc
    raise ValueError(f"timestamp inválido: {raw_ts}")


def parse_date(raw: Any) -> Optional[date]:
    """Aceita ``date``, ``datetime`` ou texto ISO (``YYYY-MM-DD`` ou timestamp completo)."""

    if raw is None:
        return None
    if isinstance(raw, datetime):
        return as_utc(raw).date()
    if isinstance(raw, date):
        return raw
    if isinstance(raw, str):
        normalized = raw.strip()
        if not normalized:
            return None
        try:
            return date.fromisoformat(normalized[:10])
        except ValueError as exc:
            raise ValueError(f"data inválida: {raw}") from exc
    raise ValueError(f"data inválida: {raw}")
