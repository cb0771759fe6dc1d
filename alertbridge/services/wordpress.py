# alertbridge/services/wordpress.py
"""
WordPress REST API content host.

Authenticates with an application password (HTTP basic auth) and uses
/wp-json/wp/v2/{categories,tags,posts,users}.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

import requests

from ..errors import RecordCreationError
from .content_host import AUTHOR_ROLES, CATEGORY_NOT_FOUND, ContentRecord

logger = logging.getLogger(__name__)

STATUS_MAP = {"published": "publish"}


class WordPressHost:
    def __init__(self, base_url: str, username: str, app_password: str, timeout: float = 10, session: Optional[requests.Session] = None):
        if not base_url:
            raise ValueError("WP_BASE_URL is required for the wordpress content host")
        self.api = f"{base_url.rstrip('/')}/wp-json/wp/v2"
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.auth = (username, app_password)
        self.session.headers.update({"Accept": "application/json"})

    def _find_term(self, taxonomy: str, name: str) -> Optional[int]:
        """Exact (case-insensitive) name match within the taxonomy search results."""
        res = self.session.get(
            f"{self.api}/{taxonomy}",
            params={"search": name, "per_page": 100},
            timeout=self.timeout,
        )
        res.raise_for_status()
        wanted = name.lower()
        for term in res.json() or []:
            if (term.get("name") or "").lower() == wanted:
                return int(term["id"])
        return None

    def resolve_category(self, name: str) -> int:
        try:
            term_id = self._find_term("categories", name)
        except (requests.RequestException, ValueError) as e:
            logger.warning(f"[WP] Category lookup failed for '{name}': {e}")
            return CATEGORY_NOT_FOUND
        return term_id if term_id is not None else CATEGORY_NOT_FOUND

    def _tag_ids(self, names: Iterable[str]) -> List[int]:
        ids = []
        for name in names:
            tag_id = self._find_term("tags", name)
            if tag_id is None:
                res = self.session.post(f"{self.api}/tags", json={"name": name}, timeout=self.timeout)
                if res.status_code >= 400:
                    raise RecordCreationError(_error_body(res))
                tag_id = _new_id(res)
            ids.append(tag_id)
        return ids

    def create_record(self, record: ContentRecord) -> int:
        try:
            payload = {
                "title": record.title,
                "content": record.content,
                "author": record.author,
                "status": STATUS_MAP.get(record.status, record.status),
                "categories": record.categories,
                "tags": self._tag_ids(record.tags),
            }
            res = self.session.post(f"{self.api}/posts", json=payload, timeout=self.timeout)
        except (requests.RequestException, ValueError) as e:
            raise RecordCreationError({"code": "http_request_failed", "message": str(e), "data": None}) from e

        if res.status_code >= 400:
            raise RecordCreationError(_error_body(res))
        return _new_id(res)

    def list_authors(self, roles: Iterable[str] = AUTHOR_ROLES) -> List[Dict[str, Any]]:
        try:
            res = self.session.get(
                f"{self.api}/users",
                params={"roles": ",".join(roles), "context": "edit", "per_page": 100},
                timeout=self.timeout,
            )
            res.raise_for_status()
            users = res.json() or []
        except (requests.RequestException, ValueError) as e:
            logger.error(f"[WP] User listing failed: {e}")
            return []
        return [{"id": u["id"], "display_name": u.get("name") or str(u["id"])} for u in users]


def _new_id(res: requests.Response) -> int:
    """Id from a 2xx create response."""
    try:
        return int(res.json()["id"])
    except (KeyError, TypeError, ValueError) as e:
        raise RecordCreationError({
            "code": "http_request_failed",
            "message": f"WordPress returned {res.status_code} without an id",
            "data": {"status": res.status_code},
        }) from e


def _error_body(res: requests.Response) -> Dict[str, Any]:
    try:
        body = res.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        return body
    return {"code": "http_error", "message": f"WordPress returned {res.status_code}", "data": {"status": res.status_code}}
