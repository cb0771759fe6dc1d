# alertbridge/routes/notification.py
import logging

from flask import Blueprint, current_app, jsonify, request

from alertbridge.errors import ForbiddenError, InvalidPayloadError, RecordCreationError
from alertbridge.services.credentials import verify_credentials

logger = logging.getLogger(__name__)

# Routes live under /wp-json/everbridge/v1/ so existing Everbridge
# integrations keep their notification URL.
API_NAMESPACE = "everbridge/"
API_VERSION = "v1"
API_PREFIX = f"/wp-json/{API_NAMESPACE}{API_VERSION}"

notification_bp = Blueprint("notification_bp", __name__)


def _unauthorized(err: ForbiddenError):
    resp = jsonify(err.to_dict())
    resp.status_code = err.status
    resp.headers["WWW-Authenticate"] = 'Basic realm="AlertBridge"'
    return resp


@notification_bp.route("/notification", methods=["POST"])
def create_alert():
    """
    Create a published post from an Everbridge notification.
    Body: {"title": "...", "body": "..."}; basic auth required.
    """
    services = current_app.extensions["alertbridge"]

    auth = request.authorization
    username = auth.username if auth is not None else None
    password = auth.password if auth is not None else None

    # Same options for the credential check and the record author
    options = services.options_store.load()
    try:
        verify_credentials(username, password, options)
    except ForbiddenError as e:
        logger.warning(f"[NOTIFY] Rejected notification from {request.remote_addr}: {e.message}")
        return _unauthorized(e)

    try:
        post_id = services.ingest.ingest(request.get_data(), options)
    except InvalidPayloadError as e:
        logger.warning(f"[NOTIFY] Rejected malformed notification: {e.message}")
        return jsonify(e.to_dict()), e.status
    except RecordCreationError as e:
        logger.error(f"[NOTIFY] Post creation failed: {e.payload}")
        return jsonify(e.payload), 500

    return jsonify(f"Created post {post_id}")
