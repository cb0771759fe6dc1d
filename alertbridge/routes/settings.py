# alertbridge/routes/settings.py
import logging

from flask import Blueprint, Response, abort, current_app, redirect, render_template, request, url_for

from alertbridge.services.options_store import sanitize_options

logger = logging.getLogger(__name__)

settings_bp = Blueprint("settings_bp", __name__)


@settings_bp.before_request
def require_admin():
    """The settings page has its own basic-auth pair and is off without a password."""
    cfg = current_app.extensions["alertbridge"].settings
    if not cfg.ADMIN_PASSWORD:
        abort(404)

    auth = request.authorization
    if auth is None or auth.username != cfg.ADMIN_USERNAME or auth.password != cfg.ADMIN_PASSWORD:
        return Response(
            "Authentication required",
            401,
            {"WWW-Authenticate": 'Basic realm="AlertBridge settings"'},
        )
    return None


@settings_bp.route("/admin/everbridge", methods=["GET"])
def settings_page():
    services = current_app.extensions["alertbridge"]
    return render_template(
        "settings.html",
        route=url_for("notification_bp.create_alert", _external=True),
        options=services.options_store.load(),
        authors=services.host.list_authors(),
        updated=request.args.get("settings-updated") == "true",
    )


@settings_bp.route("/admin/everbridge", methods=["POST"])
def save_settings():
    services = current_app.extensions["alertbridge"]
    options = sanitize_options(request.form.to_dict())
    services.options_store.save(options)
    return redirect(url_for("settings_bp.settings_page", **{"settings-updated": "true"}))
