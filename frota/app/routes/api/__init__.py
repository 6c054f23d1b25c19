"""API blueprint aggregator."""
from __future__ import annotations

from flask import Blueprint

api_bp = Blueprint("api", __name__)

from .alerts_api import alerts_api_bp
from .permissions_api import permissions_api_bp

api_bp.register_blueprint(permissions_api_bp, url_prefix="/permissions")
api_bp.register_blueprint(alerts_api_bp, url_prefix="/alerts")

__all__ = ["api_bp"]
