# tests/conftest.py
import pytest

from frota.app import create_app
from frota.app.extensions import db as _db
from frota.models.Permissions import Role
from frota.models.Users import User
from frota.repository.Permissions_repository import PermissionRepo
from frota.services.permission_service import PermissionAuthority, install_permission_authority


@pytest.fixture(scope="session")
def app():
    """Cria a aplicação Flask em modo testing (session scope)."""
    app = create_app('testing')

    app.config.update({
        "TESTING": True,
        "WTF_CSRF_ENABLED": False,
        "SECRET_KEY": "test-secret-key",
    })

    ctx = app.app_context()
    ctx.push()

    yield app

    ctx.pop()


@pytest.fixture(scope="function")
def db(app):
    """Cria todas as tabelas antes do teste e remove depois (function scope)."""
    _db.create_all()
    yield _db
    _db.session.remove()
    _db.drop_all()


@pytest.fixture(scope="function")
def client(app, db):
    """Test client usando a app e DB em memória."""
    # contexto próprio por teste para que o `g` (utilizador em cache do
    # flask_login) não passe de um teste para o seguinte
    with app.app_context():
        yield app.test_client()


@pytest.fixture(scope="function")
def permission_repo(db):
    return PermissionRepo(session=_db.session)


@pytest.fixture(scope="function")
def permission_authority(app, db):
    """Autoridade nova por teste, instalada na app para as rotas a usarem."""
    authority = PermissionAuthority(PermissionRepo())
    authority.load()
    install_permission_authority(app, authority)
    return authority


@pytest.fixture
def make_user(db):
    def _make_user(username, role=Role.STANDARD_USER):
        user = User(username=username, email=f"{username}@example.com", role=role)
        db.session.add(user)
        db.session.commit()
        return user

    return _make_user


@pytest.fixture
def login(client):
    """Simula a sessão criada pelo serviço de autenticação externo."""

    def _login(user):
        with client.session_transaction() as sess:
            sess["_user_id"] = str(user.id)
            sess["_fresh"] = True
        return user

    return _login
