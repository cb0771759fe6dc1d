"""
Unit Tests: Local Content Host
==============================
JSON-file site: category lookup, record creation, authors.
"""

import json

import pytest

from alertbridge.config import Settings
from alertbridge.errors import RecordCreationError
from alertbridge.services.content_host import (
    CATEGORY_NOT_FOUND,
    ContentRecord,
    LocalContentHost,
    build_content_host,
)
from alertbridge.services.wordpress import WordPressHost


def _record(**overrides):
    fields = dict(title="Evac Now", content="<p>Leave</p>", author=7, categories=[1, 2])
    fields.update(overrides)
    return ContentRecord(**fields)


class TestCategories:

    @pytest.mark.unit
    def test_seeded_categories_resolve(self, local_host):
        assert local_host.resolve_category("alertsu") == 1
        assert local_host.resolve_category("alert") == 2

    @pytest.mark.unit
    def test_lookup_ignores_case(self, local_host):
        assert local_host.resolve_category("ALERT") == 2

    @pytest.mark.unit
    def test_unknown_category_is_sentinel(self, local_host):
        assert local_host.resolve_category("weather") == CATEGORY_NOT_FOUND

    @pytest.mark.unit
    def test_custom_seed(self, tmp_path):
        host = LocalContentHost(str(tmp_path / "site.json"), seed_categories=["alert"])

        assert host.resolve_category("alert") == 1
        assert host.resolve_category("alertsu") == CATEGORY_NOT_FOUND


class TestCreateRecord:

    @pytest.mark.unit
    def test_ids_increment_and_persist(self, local_host, tmp_path):
        first = local_host.create_record(_record())
        second = local_host.create_record(_record())

        assert (first, second) == (1, 2)
        reopened = LocalContentHost(str(tmp_path / "site.json"))
        post = reopened.get_record(2)
        assert post["title"] == "Evac Now"
        assert post["status"] == "published"
        assert post["tags"] == ["Active"]
        assert post["author"] == 7

    @pytest.mark.unit
    def test_tags_registered_once(self, local_host):
        local_host.create_record(_record())
        local_host.create_record(_record())

        site = json.loads(local_host.path.read_text())
        assert [t["name"] for t in site["tags"]] == ["Active"]

    @pytest.mark.unit
    def test_empty_record_is_refused(self, local_host):
        with pytest.raises(RecordCreationError) as exc:
            local_host.create_record(_record(title="", content=""))

        assert exc.value.payload["code"] == "empty_content"
        assert local_host.get_record(1) is None

    @pytest.mark.unit
    def test_write_failure_is_reported(self, tmp_path):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("")
        host = LocalContentHost(str(blocker / "site.json"))

        with pytest.raises(RecordCreationError) as exc:
            host.create_record(_record())

        assert exc.value.payload["code"] == "db_insert_error"


class TestAuthors:

    @pytest.mark.unit
    def test_default_admin_listed(self, local_host):
        assert local_host.list_authors() == [{"id": 1, "display_name": "admin"}]

    @pytest.mark.unit
    def test_role_filter(self, local_host):
        assert local_host.list_authors(roles=("subscriber",)) == []


class TestFactory:

    @pytest.mark.unit
    def test_local_by_default(self, test_settings):
        assert isinstance(build_content_host(test_settings), LocalContentHost)

    @pytest.mark.unit
    def test_wordpress(self):
        host = build_content_host(Settings(CONTENT_HOST="wordpress", WP_BASE_URL="https://news.example.edu/"))

        assert isinstance(host, WordPressHost)
        assert host.api == "https://news.example.edu/wp-json/wp/v2"

    @pytest.mark.unit
    def test_wordpress_requires_url(self):
        with pytest.raises(ValueError):
            build_content_host(Settings(CONTENT_HOST="wordpress", WP_BASE_URL=""))

    @pytest.mark.unit
    def test_unknown_host(self):
        with pytest.raises(ValueError, match="Unknown content host"):
            build_content_host(Settings(CONTENT_HOST="drupal"))
