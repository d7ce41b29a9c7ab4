# shortlinks/__init__.py

from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix

from shortlinks.extensions import db, cors, init_redis
from shortlinks.utils.error_handler import register_error_handlers
from shortlinks.routes.core_routes import core_bp
from shortlinks.routes.link_routes import links_bp
from shortlinks.routes.redirect_routes import redirect_bp


def create_app(config_class=None) -> Flask:
    app = Flask(__name__)

    # Load configuration
    if config_class is None:
        from shortlinks.config import Config
        config_class = Config
    app.config.from_object(config_class)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # Initialize extensions
    cors.init_app(app, origins=app.config.get("CORS_ORIGINS") or "*")
    db.init_app(app)
    init_redis(app)

    # Fix proxy headers
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1)

    register_error_handlers(app)

    # Static rules (/, /health, /links) win over the catch-all redirect
    app.register_blueprint(core_bp)
    app.register_blueprint(links_bp, url_prefix="/links")
    app.register_blueprint(redirect_bp)

    if app.config.get("AUTO_CREATE_TABLES", True):
        with app.app_context():
            from shortlinks.models.link import Link  # noqa: F401
            db.create_all()

    return app
