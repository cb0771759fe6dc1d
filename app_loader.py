# app_loader.py – WSGI entry point (gunicorn app_loader:app)
from alertbridge.app import create_app, setup_logging
from alertbridge.config import settings

setup_logging(settings.LOG_LEVEL)

app = create_app(settings)  # ✅ Flask instance with options store + content host
