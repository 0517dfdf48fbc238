import logging
from datetime import timedelta

from flask import Flask, jsonify
from sqlalchemy.exc import SQLAlchemyError

from blogapi.config import Config
from blogapi.db import db
from blogapi.errors import BlogError
from blogapi.extensions.extensions import jwt, ma
from blogapi.logging_config import configure_logging


logger = logging.getLogger(__name__)


def _register_error_handlers(app):
    @app.errorhandler(BlogError)
    def handle_blog_error(error):
        return jsonify({"error": str(error)}), error.status_code

    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(error):
        db.session.rollback()
        logger.error("Unhandled database error", exc_info=error)
        return jsonify({"error": "Internal server error"}), 500


def create_app(config_overrides=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)

    app.config["JWT_ACCESS_TOKEN_EXPIRES"] = timedelta(
        minutes=app.config["JWT_ACCESS_TOKEN_MINUTES"]
    )
    app.config["JWT_REFRESH_TOKEN_EXPIRES"] = timedelta(
        days=app.config["JWT_REFRESH_TOKEN_DAYS"]
    )

    configure_logging(app)

    db.init_app(app)
    ma.init_app(app)
    jwt.init_app(app)

    from blogapi.models import comment_model, like_model, post_model, user_model  # noqa: F401
    from blogapi.routes.auth_routes import auth_bp
    from blogapi.routes.comment_routes import comment_bp
    from blogapi.routes.media_routes import media_bp
    from blogapi.routes.post_routes import post_bp
    from blogapi.routes.user_routes import user_bp

    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(post_bp, url_prefix="/api")
    app.register_blueprint(comment_bp, url_prefix="/api")
    app.register_blueprint(user_bp, url_prefix="/api")
    app.register_blueprint(media_bp, url_prefix="/api")

    _register_error_handlers(app)

    with app.app_context():
        db.create_all()

    logger.info("Blog API ready")
    return app
