#frota/app/__init__.py


from __future__ import annotations

from flask import Flask

from frota.app.extensions import csrf, db, login_manager, migrate
from frota.app.settings import get_app_settings, load_settings, store_settings
from frota.utils.logs import logger, setup_logger


def create_app(config_name: str | None = None) -> Flask:

    logger.process("Criando app")
    settings = load_settings(config_name)
    setup_logger(settings.log_level)
    app = Flask(__name__)
    app.config.update(settings.as_flask_config())
    app.debug = settings.debug
    app.testing = settings.testing
    store_settings(app, settings)
    logger.info("app criado (ambiente=%s)", settings.environment)

    logger.process("Iniciando extensões")
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    csrf.init_app(app)
    logger.info("extensões iniciadas")

    # registar os modelos no metadata antes do create_all
    from frota import models  # noqa: F401

    with app.app_context():
        db.create_all()
        init_permission_authority(app)
    register_blueprints(app)
    logger.info("db criado")

    return app


def init_permission_authority(app: Flask) -> None:
    """Carrega a tabela de permissões uma vez e instala a autoridade na app."""

    from frota.services.permission_service import (
        PermissionAuthority,
        StoreError,
        install_permission_authority,
    )

    authority = PermissionAuthority()
    install_permission_authority(app, authority)
    try:
        authority.load()
    except StoreError:
        # sem tabela carregada todos os papéis não-admin ficam negados
        logger.error("Permissões indisponíveis no arranque; acesso não-admin negado até novo carregamento")


def register_blueprints(app: Flask) -> None:
    from frota.app.routes.api import api_bp

    app.register_blueprint(api_bp, url_prefix="/api")
    logger.info("API registrada")


__all__ = ["create_app", "db", "get_app_settings", "init_permission_authority"]
