import logging

from flask import Flask, jsonify
from flask_bcrypt import Bcrypt
from flask_mail import Mail
from flask_cors import CORS
from flask_jwt_extended import JWTManager

from predictx.config import Config
from predictx.extensions import init_mongo, db
from predictx.utils.exceptions import register_error_handlers
from predictx.utils.logger import setup_logging

bcrypt = Bcrypt()
mail = Mail()
jwt = JWTManager()

logger = logging.getLogger(__name__)


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Disable strict slashes to prevent 308 redirects that break CORS preflight
    app.url_map.strict_slashes = False

    setup_logging(app)

    # Allow the web client to talk to Flask
    CORS(
        app,
        supports_credentials=True,
        resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}}
    )
    # Init extensions
    init_mongo(app)
    bcrypt.init_app(app)
    mail.init_app(app)
    jwt.init_app(app)
    register_error_handlers(app)

    # Register API blueprints
    from predictx.auth.routes import auth_bp
    from predictx.admin.routes import admin_bp
    from predictx.users.routes import users_bp
    from predictx.events.routes import events_bp
    from predictx.bets.routes import bets_bp
    from predictx.wallets.routes import bp as wallets_bp
    from predictx.notifications.routes import bp as notifications_bp

    app.register_blueprint(auth_bp, url_prefix='/api/v1/auth')
    app.register_blueprint(admin_bp, url_prefix='/api/v1/admin')
    app.register_blueprint(users_bp, url_prefix='/api/v1/users')
    app.register_blueprint(events_bp, url_prefix='/api/v1/events')
    app.register_blueprint(bets_bp, url_prefix='/api/v1/bets')
    app.register_blueprint(wallets_bp, url_prefix='/api/v1/wallet')
    app.register_blueprint(notifications_bp, url_prefix='/api/v1/notifications')

    from predictx.seed import register_commands
    register_commands(app)

    @app.route("/api/v1/health", methods=["GET"])
    def health():
        return jsonify({"status": "ok"})

    logger.info("PredictX API ready")
    return app


@jwt.token_in_blocklist_loader
def check_if_token_revoked(jwt_header, jwt_payload):
    return db.token_blocklist.find_one({"jti": jwt_payload["jti"]}) is not None


@jwt.unauthorized_loader
def missing_token(reason):
    return jsonify({"error": "Authentication required"}), 401


@jwt.invalid_token_loader
def invalid_token(reason):
    return jsonify({"error": f"Invalid token: {reason}"}), 401


@jwt.expired_token_loader
def expired_token(jwt_header, jwt_payload):
    return jsonify({"error": "Session expired, please log in again"}), 401


@jwt.revoked_token_loader
def revoked_token(jwt_header, jwt_payload):
    return jsonify({"error": "Token has been revoked"}), 401
