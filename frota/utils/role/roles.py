from __future__ import annotations

from functools import wraps
from typing import Any, Callable

from flask import abort, has_request_context, jsonify, request
from flask_login import current_user

from frota.app.extensions import login_manager
from frota.models.Permissions import Action, Resource
from frota.services.permission_service import get_permission_authority


def require_permission(resource: Resource, action: Action, *, format: str = "json"):
    if format not in {"html", "json"}:
        raise ValueError(f"Formato desconhecido: {format}")

    if not current_user.is_authenticated:
        return login_manager.unauthorized()

    if get_permission_authority().can_access(current_user.role, resource, action):
        return None

    if format == "json":
        payload = {
            "error": "forbidden",
            "message": "Permissão insuficiente para aceder ao recurso solicitado.",
            "resource": Resource.parse(resource).value,
            "action": Action.parse(action).value,
        }
        return jsonify(payload), 403

    abort(403)


def _infer_response_format() -> str:
    if not has_request_context():
        return "json"

    best = request.accept_mimetypes.best_match(["application/json", "text/html"])
    if best == "text/html":
        return "html"
    return "json"


def permission_required(resource: Resource, action: Action, *, format: str | None = None) -> Callable:
    def wrapper(fn: Callable) -> Callable:
        @wraps(fn)
        def decorator_view(*args: Any, **kwargs: Any):
            response_format = format or _infer_response_format()
            result = require_permission(resource, action, format=response_format)
            if result is not None:
                return result
            return fn(*args, **kwargs)

        return decorator_view

    return wrapper
