import os

from dotenv import find_dotenv, load_dotenv

from ledger_brain.logger import get_logger

logger = get_logger(__name__)


CONFIG_FILENAME = "config.yaml"

DEFAULT_OPENAI_MODEL = "gpt-4o-mini"
DEFAULT_CATEGORY_MATCH_THRESHOLD = 85.0
DEFAULT_API_HOST = "0.0.0.0"
DEFAULT_API_PORT = 8000

_CONFIG_FILE_PATH: str | None = None
_CONFIG_FILE_VALUES: dict[str, str] = {}

_CONFIG_KEYS = (
    "LOG_LEVEL",
    "LOG_DIR",
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
    "OPENAI_BASE_URL",
    "CATEGORY_MATCH_THRESHOLD",
    "API_HOST",
    "API_PORT",
)


def _resolve_dotenv_path() -> str | None:
    config_dir = os.getenv("CONFIG_DIR")
    if config_dir:
        candidate = os.path.join(config_dir, ".env")
        if os.path.exists(candidate):
            return candidate
    return find_dotenv(usecwd=True) or None


def _resolve_config_path() -> str:
    config_dir = os.getenv("CONFIG_DIR")
    if config_dir:
        return os.path.join(config_dir, CONFIG_FILENAME)
    return os.path.join(os.getcwd(), CONFIG_FILENAME)


def _clean_value(raw_value: str) -> str:
    value = raw_value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {'"', "'"}:
        return value[1:-1]
    if " #" in value:
        value = value.split(" #", 1)[0].rstrip()
    return value


def read_config_file(path: str | None) -> dict[str, str]:
    """
    Read flat `KEY: value` pairs.

    Blank lines, comments and lines without a colon are ignored; values may
    be quoted.
    """
    if not path or not os.path.exists(path):
        return {}

    values: dict[str, str] = {}
    with open(path, encoding="utf-8") as handle:
        for line in handle:
            stripped = line.strip()
            if not stripped or stripped.startswith("#") or ":" not in stripped:
                continue
            key, raw_value = stripped.split(":", 1)
            key = key.strip()
            value = _clean_value(raw_value)
            if key and value:
                values[key] = value
    return values


def load_environment() -> None:
    """Populate os.environ from .env, then config.yaml. Real env always wins."""
    global _CONFIG_FILE_PATH
    global _CONFIG_FILE_VALUES

    dotenv_path = _resolve_dotenv_path()
    if dotenv_path:
        load_dotenv(dotenv_path=dotenv_path, override=False)

    _CONFIG_FILE_PATH = _resolve_config_path()
    _CONFIG_FILE_VALUES = read_config_file(_CONFIG_FILE_PATH)

    for key in _CONFIG_KEYS:
        if key not in os.environ and key in _CONFIG_FILE_VALUES:
            os.environ[key] = _CONFIG_FILE_VALUES[key]


def get_config_path() -> str | None:
    return _CONFIG_FILE_PATH


def get_env_int(name: str, default: int, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("[ENV] Invalid %s='%s', using default %s.", name, raw, default)
        return default
    if min_value is not None and value < min_value:
        logger.warning(
            "[ENV] %s='%s' below minimum %s, using default %s.",
            name,
            raw,
            min_value,
            default,
        )
        return default
    return value


def get_env_float(name: str, default: float = 0.0) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("[ENV] Invalid %s='%s', using default %s.", name, raw, default)
        return default


def get_openai_settings() -> tuple[str | None, str, str | None]:
    """Return (api_key, model, base_url) from the environment."""
    api_key = os.getenv("OPENAI_API_KEY") or None
    model = os.getenv("OPENAI_MODEL") or DEFAULT_OPENAI_MODEL
    base_url = os.getenv("OPENAI_BASE_URL") or None
    return api_key, model, base_url


def get_category_match_threshold() -> float:
    return get_env_float("CATEGORY_MATCH_THRESHOLD", DEFAULT_CATEGORY_MATCH_THRESHOLD)


_SENSITIVE_MARKERS = ("KEY", "TOKEN", "SECRET", "PASSWORD")


def mask_env_value(name: str, value: str) -> str:
    sanitized = value.replace("\r", "\\r").replace("\n", "\\n")
    sensitive = any(marker in name.upper() for marker in _SENSITIVE_MARKERS)
    if not sensitive and not sanitized.startswith("sk-"):
        return sanitized
    if len(sanitized) <= 4:
        return "****"
    return f"{sanitized[:2]}...{sanitized[-2:]}"


def log_environment() -> None:
    logger.info("[ENV] Configured environment (masked where needed), config file: %s", _CONFIG_FILE_PATH)
    for key in _CONFIG_KEYS:
        raw_value = os.getenv(key)
        value = "<unset>" if raw_value is None else mask_env_value(key, raw_value)
        logger.info("[ENV] %s=%s", key, value)


load_environment()

API_HOST = os.getenv("API_HOST", DEFAULT_API_HOST)
API_PORT = get_env_int("API_PORT", DEFAULT_API_PORT, min_value=1)
