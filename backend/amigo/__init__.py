from flask import Flask, send_file, current_app
from .config import config_by_name
from .extensions import db, migrate, jwt
from .api.v1 import v1_bp
from .errors import register_error_handlers
from .realtime import FeedCache
from .services.storage import LocalObjectStorage
from .services.image_intake import ImageIntake
from flask_swagger_ui import get_swaggerui_blueprint
import logging
import os


def create_app(config_name: str = "development", **overrides) -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    app.config.update(overrides)

    app.logger.setLevel(getattr(logging, str(app.config["LOG_LEVEL"]).upper(), logging.INFO))

    # -------------------------------------------------
    # Extensions
    # -------------------------------------------------
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)

    from . import models

    @jwt.token_in_blocklist_loader
    def token_revoked(jwt_header, jwt_payload):
        revoked = models.RevokedToken.query.filter_by(jti=jwt_payload["jti"]).first()
        return revoked is not None

    # -------------------------------------------------
    # Collaborators
    # -------------------------------------------------
    storage = LocalObjectStorage(
        app.config["UPLOAD_FOLDER"],
        app.config["PUBLIC_BASE_URL"],
        bucket=app.config["STORAGE_BUCKET"],
    )
    app.extensions["object_storage"] = storage
    app.extensions["image_intake"] = ImageIntake(
        storage,
        max_bytes=app.config["IMAGE_MAX_BYTES"],
        max_dimension=app.config["IMAGE_MAX_DIMENSION"],
    )
    app.extensions["feed_cache"] = FeedCache()

    # -------------------------------------------------
    # API Blueprints
    # -------------------------------------------------
    app.register_blueprint(v1_bp, url_prefix="/api/v1")
    register_error_handlers(app)

    # -------------------------------------------------
    # Serve OpenAPI YAML
    # -------------------------------------------------
    @app.route("/openapi/feed.yaml", methods=["GET"], endpoint="openapi_feed")
    def serve_openapi():
        spec_path = os.path.join(
            current_app.root_path,
            "api",
            "v1",
            "feed_openapi.yaml",
        )

        if not os.path.exists(spec_path):
            raise FileNotFoundError("feed_openapi.yaml not found")

        return send_file(
            spec_path,
            mimetype="application/yaml",
            as_attachment=False,
        )

    # -------------------------------------------------
    # Swagger UI
    # -------------------------------------------------
    SWAGGER_URL = "/swagger"
    API_URL = "/openapi/feed.yaml"

    swaggerui_blueprint = get_swaggerui_blueprint(
        SWAGGER_URL,
        API_URL,
        config={
            "app_name": "Amigo Feed API",
            "deepLinking": True,
            "persistAuthorization": True,
        },
    )

    app.register_blueprint(swaggerui_blueprint, url_prefix=SWAGGER_URL)

    app.logger.info("Amigo feed app created with %s config", config_name)
    return app
