from frota.app.extensions import login_manager
from frota.app.settings import get_app_settings
from frota.models.Permissions import Role
from frota.models.Users import User
from frota.services.permission_service import PermissionAuthority, get_permission_authority


def test_app_uses_testing_config(app):
    settings = get_app_settings(app)
    assert settings.testing is True
    assert settings.database.url == "sqlite:///:memory:"
    assert settings.wtf_csrf_enabled is False
    assert settings.features.enable_seed_permissions is False


def test_blueprints_are_registered(app):
    for blueprint_name in ("api", "api.api_permissions", "api.api_alerts"):
        assert blueprint_name in app.blueprints


def test_permission_authority_is_installed(app):
    authority = get_permission_authority(app)
    assert isinstance(authority, PermissionAuthority)


def test_login_manager_user_loader(app, db):
    user = User(username="tester", email="tester@example.com", role=Role.DIRECTION)
    db.session.add(user)
    db.session.commit()

    loaded = login_manager._user_callback(str(user.id))
    assert loaded is not None
    assert loaded.id == user.id
    assert loaded.is_admin() is False


def test_user_loader_ignores_malformed_ids(app, db):
    assert login_manager._user_callback("not-a-number") is None
