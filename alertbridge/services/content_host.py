# alertbridge/services/content_host.py
"""
Content host capabilities used by the notification handler.

A content host resolves category names, creates published records and
lists the users that may author them. LocalContentHost keeps a small site
in a JSON file; WordPressHost (services/wordpress.py) talks to a remote
WordPress REST API.
"""

from __future__ import annotations

import json
import logging
import os
import threading
import time
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Protocol

from ..errors import RecordCreationError

logger = logging.getLogger(__name__)

CATEGORY_NOT_FOUND = 0
AUTHOR_ROLES = ("administrator", "editor")


@dataclass
class ContentRecord:
    title: str
    content: str
    author: int
    categories: List[int]
    status: str = "published"
    tags: List[str] = field(default_factory=lambda: ["Active"])

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class ContentHost(Protocol):
    def resolve_category(self, name: str) -> int:
        """Category id for `name`, or CATEGORY_NOT_FOUND."""

    def create_record(self, record: ContentRecord) -> int:
        """Id of the new record. Raises RecordCreationError on failure."""

    def list_authors(self, roles: Iterable[str] = AUTHOR_ROLES) -> List[Dict[str, Any]]:
        """[{"id", "display_name"}] for users holding one of `roles`."""


def _empty_site(seed_categories: Iterable[str]) -> Dict[str, Any]:
    categories = [
        {"id": i, "name": name, "slug": name.lower()}
        for i, name in enumerate(seed_categories, start=1)
    ]
    return {
        "next_id": 1,
        "posts": [],
        "categories": categories,
        "tags": [],
        "users": [{"id": 1, "display_name": "admin", "roles": ["administrator"]}],
    }


class LocalContentHost:
    """
    JSON-file site: posts, categories, tags and users.

    Best effort persistence, one writer at a time within the process.
    """

    def __init__(self, path: str, seed_categories: Iterable[str] = ("alertsu", "alert")):
        self.path = Path(path)
        self._lock = threading.Lock()
        self._seed = list(seed_categories)

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return _empty_site(self._seed)
        try:
            with open(self.path, "r") as f:
                data = json.load(f)
            if isinstance(data, dict) and isinstance(data.get("posts"), list):
                return data
        except (OSError, ValueError) as e:
            logger.warning(f"[SITE] Unreadable site file {self.path}: {e}")
        return _empty_site(self._seed)

    def _save(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = str(self.path) + ".tmp"
        with open(tmp, "w") as f:
            json.dump(data, f, indent=2)
        os.replace(tmp, self.path)

    def resolve_category(self, name: str) -> int:
        wanted = (name or "").strip().lower()
        with self._lock:
            site = self._load()
        for cat in site.get("categories", []):
            if (cat.get("name") or "").lower() == wanted:
                return int(cat["id"])
        return CATEGORY_NOT_FOUND

    def create_record(self, record: ContentRecord) -> int:
        if not record.title and not record.content:
            raise RecordCreationError({
                "code": "empty_content",
                "message": "Content, title, and excerpt are empty.",
                "data": None,
            })

        with self._lock:
            site = self._load()
            post_id = int(site.get("next_id", 1))

            known_tags = {t["name"] for t in site.setdefault("tags", [])}
            for tag in record.tags:
                if tag not in known_tags:
                    site["tags"].append({"id": len(site["tags"]) + 1, "name": tag})
                    known_tags.add(tag)

            post = record.to_dict()
            post["id"] = post_id
            post["date"] = time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())
            site["posts"].append(post)
            site["next_id"] = post_id + 1

            try:
                self._save(site)
            except OSError as e:
                raise RecordCreationError({
                    "code": "db_insert_error",
                    "message": "Could not insert post into the database.",
                    "data": str(e),
                }) from e

        return post_id

    def get_record(self, post_id: int) -> Optional[Dict[str, Any]]:
        with self._lock:
            site = self._load()
        for post in site.get("posts", []):
            if post.get("id") == post_id:
                return post
        return None

    def list_authors(self, roles: Iterable[str] = AUTHOR_ROLES) -> List[Dict[str, Any]]:
        roles = set(roles)
        with self._lock:
            site = self._load()
        return [
            {"id": u["id"], "display_name": u.get("display_name") or str(u["id"])}
            for u in site.get("users", [])
            if roles.intersection(u.get("roles") or [])
        ]


def build_content_host(settings) -> ContentHost:
    """Pick the content host configured by CONTENT_HOST."""
    kind = (settings.CONTENT_HOST or "local").strip().lower()

    if kind == "wordpress":
        from .wordpress import WordPressHost

        return WordPressHost(
            settings.WP_BASE_URL,
            settings.WP_USERNAME,
            settings.WP_APP_PASSWORD,
            timeout=settings.HTTP_TIMEOUT_SECS,
        )

    if kind != "local":
        raise ValueError(f"Unknown content host: {settings.CONTENT_HOST}")

    return LocalContentHost(settings.SITE_FILE, seed_categories=settings.seed_categories())
