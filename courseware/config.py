"""
Centralized configuration for the courseware service.

Settings are read from the environment on each call so tests can patch
os.environ; .env files are loaded by the entry points via python-dotenv.
"""

import os
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent

DEFAULT_PREVIEW_CHARS = 600


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.lower() in ("true", "1", "yes")


def is_dev_mode() -> bool:
    """Check if running in development mode (--dev flag or DEV_MODE env)."""
    return _env_flag("DEV_MODE")


def is_production() -> bool:
    """Check if running on Railway (production environment)."""
    return bool(os.environ.get("RAILWAY_ENVIRONMENT"))


def get_api_port() -> int:
    """Get API server port from env or default."""
    return int(os.getenv("API_PORT", "8000"))


def get_content_dir() -> Path:
    """Root directory of the markdown content store."""
    configured = os.getenv("CONTENT_DIR")
    if configured:
        return Path(configured)
    return PROJECT_ROOT / "content"


def get_preview_chars() -> int:
    """Maximum length of the preview shown for gated lessons."""
    try:
        value = int(os.getenv("PREVIEW_CHARS", str(DEFAULT_PREVIEW_CHARS)))
    except ValueError:
        return DEFAULT_PREVIEW_CHARS
    return value if value > 0 else DEFAULT_PREVIEW_CHARS


def is_syllabus_cache_enabled() -> bool:
    """Whether parsed syllabi are memoized per document revision."""
    return _env_flag("SYLLABUS_CACHE", default=True)


def get_frontend_url() -> str:
    """Get the public frontend URL (used for CORS and redirects)."""
    return os.environ.get("FRONTEND_URL", "http://localhost:3000").rstrip("/")


def get_allowed_origins() -> list[str]:
    """
    Get list of allowed CORS origins.

    Includes localhost variants for dev and the configured frontend URL.
    """
    hosts = ["localhost", "127.0.0.1"]
    ports = [3000, get_api_port()]
    origins = [f"http://{host}:{port}" for host in hosts for port in ports]

    frontend_url = get_frontend_url()
    if frontend_url not in origins:
        origins.append(frontend_url)

    return origins


# Required environment variables
# Format: (name, description, required_in_dev)
REQUIRED_ENV_VARS = [
    ("DATABASE_URL", "PostgreSQL connection string for entitlements", False),
    ("JWT_SECRET", "Secret key for session JWTs", True),
]


def check_required_env_vars() -> tuple[bool, list[str]]:
    """
    Check that required environment variables are set.

    Returns:
        (all_ok, warnings): Tuple of success flag and list of warning messages
    """
    warnings = []
    errors = []
    in_dev = is_dev_mode()

    for name, description, required_in_dev in REQUIRED_ENV_VARS:
        if os.environ.get(name):
            continue
        if is_production():
            errors.append(f"  ✗ {name}: Not set ({description})")
        elif required_in_dev or not in_dev:
            warnings.append(f"  ⚠ {name}: Not set ({description})")

    if errors:
        for error in errors:
            print(error)
        return False, warnings

    return True, warnings
