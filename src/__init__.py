from flask import Flask, render_template, redirect, url_for, request
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager, current_user
from dotenv import load_dotenv
from flask_migrate import Migrate
from flask_compress import Compress
import os

# Load environment variables early so config is available at app creation
load_dotenv()

db = SQLAlchemy()
migrate = Migrate()
login_manager = LoginManager()
compress = Compress()


def create_app(overrides: dict | None = None) -> Flask:
    """
    Application factory for the Flask app.
    Loads configuration from the environment, configures the database,
    and registers blueprints.
    """
    from src.config import Config
    config = Config()

    # Validate configuration
    config.validate()

    project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

    app = Flask(
        __name__,
        template_folder=os.path.join(project_root, "templates"),
    )

    # Load configuration from config module
    app.config["SECRET_KEY"] = config.SECRET_KEY
    db_uri = config.SQLALCHEMY_DATABASE_URI
    app.config["SQLALCHEMY_DATABASE_URI"] = db_uri
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = config.SQLALCHEMY_TRACK_MODIFICATIONS
    app.config["SQLALCHEMY_ECHO"] = config.SQLALCHEMY_ECHO
    if db_uri.startswith("mysql"):
        # Connection pooling only applies to the MySQL server backend
        app.config["SQLALCHEMY_ENGINE_OPTIONS"] = {
            "pool_size": 10,
            "pool_recycle": 3600,
            "pool_pre_ping": True,
            "max_overflow": 20,
            "connect_args": {
                "connect_timeout": 5,
                "charset": "utf8mb4",
            }
        }

    # Response compression settings
    app.config["COMPRESS_MIMETYPES"] = ['text/html', 'text/css']
    app.config["COMPRESS_LEVEL"] = 6
    app.config["COMPRESS_MIN_SIZE"] = 500
    app.config["SESSION_COOKIE_SECURE"] = config.SESSION_COOKIE_SECURE
    app.config["SESSION_COOKIE_HTTPONLY"] = config.SESSION_COOKIE_HTTPONLY
    app.config["SESSION_COOKIE_SAMESITE"] = config.SESSION_COOKIE_SAMESITE
    app.config["MIN_PASSWORD_LENGTH"] = config.MIN_PASSWORD_LENGTH
    app.config["CSRF_ENABLED"] = config.CSRF_ENABLED

    if overrides:
        app.config.update(overrides)

    app.logger.setLevel(config.LOG_LEVEL)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    login_manager.login_view = 'auth.login'
    login_manager.login_message = 'Please log in to access this page.'
    login_manager.login_message_category = 'error'
    compress.init_app(app)

    # Initialize security features
    from src.security import init_security
    init_security(app)

    @login_manager.user_loader
    def load_user(user_id):
        from src.auth.models import User
        try:
            return db.session.get(User, int(user_id))
        except (ValueError, TypeError):
            return None

    @app.route("/")
    def index():
        if current_user.is_authenticated:
            return redirect(url_for(current_user.role.dashboard_endpoint))
        return redirect(url_for('auth.login'))

    @app.route("/access-denied")
    def access_denied():
        return render_template("access_denied.html"), 403

    @app.errorhandler(403)
    def handle_403(e):
        return render_template("access_denied.html"), 403

    @app.errorhandler(404)
    def handle_404(e):
        app.logger.warning(f"404 error: {request.method} {request.path}")
        return render_template("not_found.html", path=request.path), 404

    # Register blueprints
    from src.auth import auth_bp
    app.register_blueprint(auth_bp)

    from src.admin import admin_bp
    app.register_blueprint(admin_bp)

    from src.participant import participant_bp
    app.register_blueprint(participant_bp)

    # Create tables if they do not exist
    with app.app_context():
        from src.auth.models import User  # noqa: F401
        from src.quiz.models import Quiz, Question, Submission  # noqa: F401
        db.create_all()

    return app
