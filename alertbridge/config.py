# alertbridge/config.py
import os
from dataclasses import dataclass
from pathlib import Path

PACKAGE_DIR = Path(__file__).resolve().parent
_DATA_DIR = os.getenv("ALERTBRIDGE_DATA_DIR", str(PACKAGE_DIR / "data"))


def _flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    # Core
    PORT: int = int(os.getenv("PORT", "10000"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Storage
    DATA_DIR: str = _DATA_DIR
    OPTIONS_FILE: str = os.getenv("ALERTBRIDGE_OPTIONS_FILE", os.path.join(_DATA_DIR, "options.json"))

    # Content host: "local" (JSON site file) or "wordpress" (REST API)
    CONTENT_HOST: str = os.getenv("ALERTBRIDGE_CONTENT_HOST", "local")
    SITE_FILE: str = os.getenv("ALERTBRIDGE_SITE_FILE", os.path.join(_DATA_DIR, "site.json"))
    SEED_CATEGORIES: str = os.getenv("ALERTBRIDGE_SEED_CATEGORIES", "alertsu,alert")

    WP_BASE_URL: str = os.getenv("WP_BASE_URL", "").strip()
    WP_USERNAME: str = os.getenv("WP_USERNAME", "").strip()
    WP_APP_PASSWORD: str = os.getenv("WP_APP_PASSWORD", "").strip()
    HTTP_TIMEOUT_SECS: float = float(os.getenv("HTTP_TIMEOUT_SECS", "10"))

    # Settings page; an empty password disables it
    ADMIN_USERNAME: str = os.getenv("ADMIN_USERNAME", "admin")
    ADMIN_PASSWORD: str = os.getenv("ADMIN_PASSWORD", "")

    # Reject notification bodies that are not a JSON object
    STRICT_JSON: bool = _flag("ALERTBRIDGE_STRICT_JSON")

    def seed_categories(self) -> list:
        return [c.strip() for c in self.SEED_CATEGORIES.split(",") if c.strip()]


settings = Settings()
