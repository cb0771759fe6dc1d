# alertbridge/services/ingest.py
"""
Notification ingest: turns one Everbridge notification into a published record.

The handler is built once by the app factory with its options store and
content host. Each call reads the options fresh, so settings saved through
the admin page apply to the next notification.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional, Union

from ..errors import InvalidPayloadError
from .content_host import CATEGORY_NOT_FOUND, ContentHost, ContentRecord
from .options_store import Options, OptionsStore
from .sanitize import kses_post, sanitize_text_field

logger = logging.getLogger(__name__)

ALERT_CATEGORIES = ("alertsu", "alert")
ALERT_TAGS = ("Active",)


class NotificationIngest:
    def __init__(self, options_store: OptionsStore, host: ContentHost, strict_json: bool = False):
        self.options_store = options_store
        self.host = host
        self.strict_json = strict_json

    def parse(self, raw_body: Union[bytes, str, None]) -> Dict[str, Any]:
        """
        Decode the notification body.

        Anything that is not a UTF-8 JSON object yields an empty notification,
        or InvalidPayloadError in strict mode.
        """
        try:
            if isinstance(raw_body, bytes):
                raw_body = raw_body.decode("utf-8")
            alert = json.loads(raw_body or "")
        except ValueError as e:  # includes UnicodeDecodeError
            if self.strict_json:
                raise InvalidPayloadError() from e
            logger.warning(f"[INGEST] Body is not valid JSON, continuing with empty fields: {e}")
            return {}

        if not isinstance(alert, dict):
            if self.strict_json:
                raise InvalidPayloadError("Notification body must be a JSON object")
            logger.warning(f"[INGEST] Body is JSON {type(alert).__name__}, not an object")
            return {}
        return alert

    def build_record(self, alert: Dict[str, Any], options: Options) -> ContentRecord:
        categories = []
        for name in ALERT_CATEGORIES:
            cat_id = self.host.resolve_category(name)
            if cat_id == CATEGORY_NOT_FOUND:
                logger.warning(f"[INGEST] Category '{name}' not found")
            categories.append(cat_id)

        return ContentRecord(
            title=sanitize_text_field(alert.get("title")),
            content=kses_post(alert.get("body")),
            author=options.authorid,
            status="published",
            categories=categories,
            tags=list(ALERT_TAGS),
        )

    def ingest(self, raw_body: Union[bytes, str, None], options: Optional[Options] = None) -> int:
        """
        Create the record for one notification and return its id.

        `options` is the copy the caller already verified credentials against;
        the store is read only when none is given.
        """
        alert = self.parse(raw_body)
        if options is None:
            options = self.options_store.load()
        record = self.build_record(alert, options)
        post_id = self.host.create_record(record)
        logger.info(f"[INGEST] Created post {post_id}: {record.title[:60]}")
        return post_id
