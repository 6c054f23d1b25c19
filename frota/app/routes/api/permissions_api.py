"""Endpoints da tabela de permissões (matriz, verificação e alteração)."""
from __future__ import annotations

from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required

from frota.models.Permissions import Action, InvalidPermissionKey, Resource
from frota.services.permission_service import PermissionServiceError, get_permission_authority
from frota.utils.constants.constants import ACTION_LABELS, RESOURCE_LABELS, ROLE_LABELS
from frota.utils.role.roles import permission_required

from .common import error_response, parse_bool, service_error_response

permissions_api_bp = Blueprint("api_permissions", __name__)


@permissions_api_bp.route("", methods=["GET"])
@login_required
@permission_required(Resource.PERMISSIONS, Action.VIEW)
def list_permissions():
    authority = get_permission_authority()
    return jsonify(
        {
            "loaded": authority.is_loaded,
            "can_edit": current_user.is_admin(),
            "labels": {
                "roles": {role.value: label for role, label in ROLE_LABELS.items()},
                "resources": {resource.value: label for resource, label in RESOURCE_LABELS.items()},
                "actions": {action.value: label for action, label in ACTION_LABELS.items()},
            },
            "matrix": authority.matrix(),
            "grants": [grant.to_dict() for grant in authority.grants()],
        }
    )


@permissions_api_bp.route("/check", methods=["GET"])
@login_required
def check_permission():
    resource = request.args.get("resource", "")
    action = request.args.get("action", "")
    try:
        allowed = get_permission_authority().can_access(current_user.role, resource, action)
    except InvalidPermissionKey as exc:
        return error_response(str(exc), 400)

    return jsonify(
        {
            "role": current_user.role.value,
            "resource": Resource.parse(resource).value,
            "action": Action.parse(action).value,
            "allowed": allowed,
        }
    )


@permissions_api_bp.route("", methods=["PUT"])
@login_required
def update_permission():
    payload = request.get_json(silent=True) or {}
    allowed = parse_bool(payload.get("allowed"))
    if allowed is None:
        return error_response("Indique 'allowed' como verdadeiro ou falso.", 400)

    try:
        grant = get_permission_authority().update_permission(
            payload.get("role"),
            payload.get("resource"),
            payload.get("action"),
            allowed,
            actor_role=current_user.role,
        )
    except InvalidPermissionKey as exc:
        return error_response(str(exc), 400)
    except PermissionServiceError as exc:
        return service_error_response(exc)

    return jsonify(grant.to_dict())


@permissions_api_bp.route("/refresh", methods=["POST"])
@login_required
def refresh_permissions():
    if not current_user.is_admin():
        return error_response("Apenas administradores podem recarregar permissões.", 403)

    try:
        count = get_permission_authority().load()
    except PermissionServiceError as exc:
        return service_error_response(exc)

    return jsonify({"loaded": count})


__all__ = ["permissions_api_bp"]
