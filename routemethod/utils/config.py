"""Load and validate environment variables. Uses python-dotenv.

Callers should use the accessor functions below rather than reading `os.environ`
directly, to keep environment handling consistent.
"""

from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
import logging
import os

DEFAULT_CLOSING_MARKERS = (
    "This is your RouteMethod itinerary.",
    "**A few things before we finalize:**",
)


def _project_root() -> Path:
    """Resolve project root (the directory holding `routemethod/`)."""
    return Path(__file__).resolve().parent.parent.parent


def load_config() -> None:
    """
    Load .env from project root. Idempotent; safe to call multiple times.
    Uses override=True to ensure .env values take precedence over existing env vars.
    """
    env_path = _project_root() / ".env"
    load_dotenv(env_path, override=True)


def get_required(key: str) -> str:
    """
    Get required env var. Raises if missing or empty.

    Raises:
        ValueError: If key is missing or empty after trimming.
    """
    load_config()
    val = os.getenv(key, "").strip()
    if not val:
        raise ValueError(
            f"Missing required environment variable: {key}. "
            "Set it in .env or export it."
        )
    return val


def get_optional(key: str, default: str = "") -> str:
    """Get optional env var; return default if missing or empty."""
    load_config()
    val = os.getenv(key, "").strip()
    return val if val else default


def get_optional_int(key: str, default: int) -> int:
    """Get optional env var as int; return default if missing or invalid."""
    load_config()
    raw = os.getenv(key, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def get_optional_list(key: str, default: tuple[str, ...], sep: str = "|") -> tuple[str, ...]:
    """Get optional `sep`-separated env var as a tuple; blank items are dropped."""
    raw = get_optional(key, "")
    if not raw:
        return default
    items = tuple(part.strip() for part in raw.split(sep) if part.strip())
    return items or default


# --- Public config accessors ---

def anthropic_api_key() -> str:
    """Required: Anthropic API key used for the chat proxy."""
    return get_required("ANTHROPIC_API_KEY")


def llm_base_url() -> str:
    """Messages endpoint. Override with ANTHROPIC_BASE_URL for a proxy."""
    return get_optional("ANTHROPIC_BASE_URL", "https://api.anthropic.com/v1/messages")


def llm_model() -> str:
    """Optional: model name. Default claude-sonnet-4-5."""
    return get_optional("ANTHROPIC_MODEL", "claude-sonnet-4-5")


def llm_max_tokens() -> int:
    """Optional: max tokens for LLM responses. Default 4096."""
    return get_optional_int("ANTHROPIC_MAX_TOKENS", 4096)


def llm_timeout() -> int:
    """Optional: HTTP timeout in seconds for the streaming request. Default 60."""
    return get_optional_int("ANTHROPIC_TIMEOUT", 60)


def max_refinements() -> int:
    """Optional: refinements allowed once an itinerary is delivered. Default 10."""
    return get_optional_int("MAX_REFINEMENTS", 10)


def closing_markers() -> tuple[str, ...]:
    """
    Phrases that end the itinerary region of an assistant message.

    The upstream prompt wording changes between revisions, so these are read from
    ITINERARY_CLOSING_MARKERS (pipe-separated) when set.
    """
    return get_optional_list("ITINERARY_CLOSING_MARKERS", DEFAULT_CLOSING_MARKERS)


def log_level() -> int:
    """Optional: LOG_LEVEL name (DEBUG, INFO, ...). Default INFO."""
    name = get_optional("LOG_LEVEL", "INFO").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def log_file() -> Optional[Path]:
    """Optional: LOG_FILE path, relative paths resolve against the project root."""
    val = get_optional("LOG_FILE", "")
    if not val:
        return None
    path = Path(val)
    return path if path.is_absolute() else _project_root() / path


def project_root() -> Path:
    """Project root directory."""
    return _project_root()
