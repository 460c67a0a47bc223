import logging
from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException
from ispdesk.config import Config
from ispdesk.extension import db, migrate, jwt, ma
from ispdesk.routes_controller import register_routes
from ispdesk.seed import seed


def create_app(config=None):
    app = Flask(__name__)

    app.config.from_object(Config)
    app.config.from_prefixed_env()
    if config:
        app.config.update(config)

    logging.basicConfig(level=logging.INFO)

    CORS(app,
         supports_credentials=True,
         origins=app.config["CORS_ORIGINS"],
         methods=["GET", "POST", "PUT", "PATCH", "OPTIONS"],
         allow_headers=["Content-Type", "Authorization"],
         expose_headers=["Authorization", "Content-Disposition"],
         max_age=3600
    )

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    ma.init_app(app)

    with app.app_context():
        if app.config["AUTO_MIGRATE"]:
            from flask_migrate import upgrade
            upgrade()
        else:
            db.create_all()
        if app.config["SEED_DEMO_DATA"]:
            seed()

    # Register routes
    register_routes(app)

    @app.errorhandler(Exception)
    def handle_error(e):
        if isinstance(e, HTTPException):
            return jsonify({"message": e.description}), e.code
        app.logger.error(f"Unhandled error: {e}", exc_info=True)
        return jsonify({"error": str(e)}), 500

    @app.route('/')
    def home():
        return {"message": "Welcome to ispdesk API"}

    # JWT error handlers
    @jwt.invalid_token_loader
    def invalid_token_callback(error):
        return {
            "message": "Invalid token",
            "error": str(error)
        }, 401

    @jwt.unauthorized_loader
    def missing_token_callback(error):
        return {
            "message": "Missing authorization token",
            "error": str(error)
        }, 401

    @jwt.expired_token_loader
    def expired_token_callback(jwt_header, jwt_payload):
        return {"message": "Token has expired"}, 401

    return app
