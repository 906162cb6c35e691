import logging
from datetime import datetime

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from inventory_app.config import Config
from inventory_app.extensions import db, migrate, jwt, mail
from inventory_app.utils.responses import fail


def _register_jwt_callbacks():
    from inventory_app.repositories.user_repo import UserRepo

    @jwt.token_in_blocklist_loader
    def _is_revoked(jwt_header, jwt_payload):
        return UserRepo.is_token_revoked(jwt_payload["jti"])

    @jwt.unauthorized_loader
    def _missing_token(reason):
        return fail("Unauthenticated", 401, error=reason)

    @jwt.invalid_token_loader
    def _invalid_token(reason):
        return fail("Invalid token", 401, error=reason)

    @jwt.expired_token_loader
    def _expired_token(jwt_header, jwt_payload):
        return fail("Token has expired", 401)

    @jwt.revoked_token_loader
    def _revoked_token(jwt_header, jwt_payload):
        return fail("Token has been revoked", 401)


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.logger.setLevel(getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO))

    # 1) db first; importing the models registers their tables
    db.init_app(app)
    from inventory_app.models import user, category, item, transaction, notification, token_blocklist  # noqa: F401

    # 2) remaining extensions
    migrate.init_app(app, db)
    jwt.init_app(app)
    mail.init_app(app)
    _register_jwt_callbacks()

    # 3) API blueprints (prefixes live on the routes)
    from inventory_app.controllers.auth_controller import auth_bp
    from inventory_app.controllers.category_controller import category_bp
    from inventory_app.controllers.item_controller import item_bp
    from inventory_app.controllers.transaction_controller import transaction_bp
    from inventory_app.controllers.notification_controller import notif_bp
    from inventory_app.controllers.user_controller import user_bp
    app.register_blueprint(auth_bp)
    app.register_blueprint(category_bp)
    app.register_blueprint(item_bp)
    app.register_blueprint(transaction_bp)
    app.register_blueprint(notif_bp)
    app.register_blueprint(user_bp)

    @app.get("/health")
    def health():
        return jsonify({
            "status": True,
            "message": "API is running",
            "timestamp": datetime.utcnow().strftime("%Y-%m-%d %H:%M:%S")
        })

    @app.errorhandler(HTTPException)
    def _http_error(e):
        return fail(e.description or e.name, e.code)

    from inventory_app.cli import register_commands
    register_commands(app)

    return app
