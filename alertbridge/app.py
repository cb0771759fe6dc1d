# alertbridge/app.py
import logging
import sys
from dataclasses import dataclass
from typing import Optional

from flask import Flask, jsonify
from flask_cors import CORS

# ---- Core Config ----
from alertbridge.config import Settings, settings as default_settings
from alertbridge.routes.notification import API_PREFIX, notification_bp
from alertbridge.routes.settings import settings_bp
from alertbridge.services.content_host import ContentHost, build_content_host
from alertbridge.services.ingest import NotificationIngest
from alertbridge.services.options_store import OptionsStore


def setup_logging(level: str = "INFO"):
    """Configure root logging to stdout."""
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


@dataclass
class Services:
    settings: Settings
    options_store: OptionsStore
    host: ContentHost
    ingest: NotificationIngest


def create_app(
    settings: Optional[Settings] = None,
    options_store: Optional[OptionsStore] = None,
    host: Optional[ContentHost] = None,
) -> Flask:
    """Build the Flask app with its options store, content host and ingest handler."""
    settings = settings or default_settings
    options_store = options_store or OptionsStore(settings.OPTIONS_FILE)
    host = host or build_content_host(settings)

    # ---- Initialize Flask ----
    app = Flask(__name__)
    CORS(app, resources={r"/wp-json/*": {"origins": "*"}})

    app.extensions["alertbridge"] = Services(
        settings=settings,
        options_store=options_store,
        host=host,
        ingest=NotificationIngest(options_store, host, strict_json=settings.STRICT_JSON),
    )

    # ---- Root Routes ----
    @app.route("/")
    def home():
        return "AlertBridge is live"

    @app.route("/healthz")
    def healthz():
        return jsonify({"ok": True})

    # ---- Blueprints ----
    app.register_blueprint(notification_bp, url_prefix=API_PREFIX)
    app.register_blueprint(settings_bp, url_prefix="")

    return app


# ---- Run Server ----
if __name__ == "__main__":
    setup_logging(default_settings.LOG_LEVEL)
    create_app().run(host="0.0.0.0", port=default_settings.PORT)
