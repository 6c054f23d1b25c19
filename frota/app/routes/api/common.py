"""Shared helpers for API blueprints."""
from __future__ import annotations

from typing import Any, Dict, Optional

from flask import jsonify

from frota.services.permission_service import PermissionServiceError


def error_response(message: str, status_code: int, *, extra: Optional[Dict[str, Any]] = None):
    payload: Dict[str, Any] = {"message": message}
    if extra:
        payload.update(extra)
    return jsonify(payload), status_code


def service_error_response(exc: PermissionServiceError):
    return error_response(str(exc), exc.status_code, extra=exc.context or None)


def parse_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in {"1", "true", "on", "yes"}:
            return True
        if text in {"0", "false", "off", "no"}:
            return False
    return None
