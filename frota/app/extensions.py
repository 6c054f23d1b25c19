from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_login import LoginManager
from flask_wtf.csrf import CSRFProtect

# Inicializar extensões
db = SQLAlchemy()
migrate = Migrate()
login_manager = LoginManager()
csrf = CSRFProtect()

# Sessão e autenticação são tratadas fora deste serviço; sem login_view o
# flask_login responde 401 a pedidos anónimos.
login_manager.login_view = None


@login_manager.user_loader
def load_user(user_id):
    from frota.models.Users import User

    try:
        return db.session.get(User, int(user_id))
    except (TypeError, ValueError):
        return None
