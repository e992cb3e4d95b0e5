import logging

from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_jwt_extended import JWTManager
from flask_bcrypt import Bcrypt
from config import config

# Initialize extensions
db = SQLAlchemy()
migrate = Migrate()
jwt = JWTManager()
bcrypt = Bcrypt()

def configure_logging(app):
    level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s'
    )
    logging.getLogger('hotspot').setLevel(level)

def create_app(config_name='default', config_overrides=None):
    app = Flask(__name__)

    # Load config
    app.config.from_object(config[config_name])
    if config_overrides:
        app.config.update(config_overrides)
    configure_logging(app)

    # Initialize extensions with app
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    bcrypt.init_app(app)

    # Register blueprints
    from hotspot.routes.plans import plans_bp
    from hotspot.routes.vouchers import vouchers_bp
    from hotspot.routes.admin import admin_bp

    app.register_blueprint(plans_bp, url_prefix='/api/plans')
    app.register_blueprint(vouchers_bp, url_prefix='/api/vouchers')
    app.register_blueprint(admin_bp, url_prefix='/api/admin')

    # CLI commands
    from hotspot.init_admin import create_admin_command, init_db_command
    app.cli.add_command(create_admin_command)
    app.cli.add_command(init_db_command)

    # JWT user loader
    @jwt.user_lookup_loader
    def user_lookup_callback(_jwt_header, jwt_data):
        from hotspot.models.profile import Profile
        identity = jwt_data["sub"]
        return db.session.get(Profile, int(identity))

    # Revoked admin sessions
    @jwt.token_in_blocklist_loader
    def token_in_blocklist_callback(_jwt_header, jwt_payload):
        from hotspot.models.token_blocklist import TokenBlocklist
        return TokenBlocklist.is_revoked(jwt_payload["jti"])

    return app
