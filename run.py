import logging
import os

from frota.app import create_app
from frota.app.settings import get_app_settings
from frota.models.Permissions import Role
from frota.services.permission_service import StoreError, get_permission_authority
from frota.utils.logs import logger


app = create_app(os.getenv("APP_ENV"))


def seed_permissions() -> int:
    """Semeia as permissões por omissão que ainda não existem na tabela."""

    with app.app_context():
        try:
            return get_permission_authority(app).seed_defaults(actor_role=Role.ADMIN)
        except StoreError:
            logger.exception("Falha ao semear permissões por omissão")
            return 0


if __name__ == "__main__":
    settings = get_app_settings(app)
    if settings.features.enable_seed_permissions:
        created = seed_permissions()
        logger.process("%d permissões por omissão criadas.", created)

    logger.process("Iniciando servidor Flask em http://0.0.0.0:5000")
    logging.getLogger("sqlalchemy").setLevel(logging.CRITICAL)
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=settings.debug, use_reloader=False)
