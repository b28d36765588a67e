"""Load environment and file configuration."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from jobscout.errors import ConfigurationError
from jobscout.log import get_logger

log = get_logger(__name__)

load_dotenv()

ROOT_DIR: Path = Path(__file__).resolve().parent.parent
CONFIG_DIR: Path = ROOT_DIR / "config"
PROFILE_SEED_PATH: Path = CONFIG_DIR / "profile.yaml"
DATA_DIR: Path = Path(os.environ.get("JOBSCOUT_DATA_DIR") or ROOT_DIR / "data")
EXPORT_DIR: Path = DATA_DIR / "exports"

DEFAULT_BASE_URL = "https://api.groq.com/openai/v1"
DEFAULT_MODEL = "llama-3.3-70b-versatile"
DEFAULT_SEARCH_MODEL = "groq/compound"
DEFAULT_VISION_MODEL = "meta-llama/llama-4-scout-17b-16e-instruct"


@dataclass(frozen=True)
class ProviderSettings:
    api_key: str
    model: str = DEFAULT_MODEL
    search_model: str = DEFAULT_SEARCH_MODEL
    vision_model: str = DEFAULT_VISION_MODEL
    base_url: str = DEFAULT_BASE_URL
    max_tokens: int = 2048
    timeout: float = 60.0


def get_env(key: str, default: str = "") -> str:
    return os.environ.get(key, default).strip()


def load_provider_settings() -> ProviderSettings:
    raw_tokens = get_env("LLM_MAX_TOKENS", "2048")
    try:
        max_tokens = int(raw_tokens)
    except ValueError:
        raise ConfigurationError(f"LLM_MAX_TOKENS must be an integer, got {raw_tokens!r}") from None

    return ProviderSettings(
        api_key=get_env("GROQ_API_KEY"),
        model=get_env("GROQ_LLM_MODEL", DEFAULT_MODEL) or DEFAULT_MODEL,
        search_model=get_env("GROQ_SEARCH_MODEL", DEFAULT_SEARCH_MODEL) or DEFAULT_SEARCH_MODEL,
        vision_model=get_env("GROQ_VISION_MODEL", DEFAULT_VISION_MODEL) or DEFAULT_VISION_MODEL,
        base_url=get_env("GROQ_BASE_URL", DEFAULT_BASE_URL) or DEFAULT_BASE_URL,
        max_tokens=max_tokens,
    )


def require_api_key(settings: ProviderSettings) -> ProviderSettings:
    """Fail fast when the generation provider cannot possibly work."""
    if not settings.api_key:
        raise ConfigurationError(
            "GROQ_API_KEY is not set. Add it to .env to enable AI features."
        )
    return settings


def load_profile_overrides(path: Path | None = None) -> dict[str, Any]:
    """Optional YAML overrides for the demo profile; empty when absent."""
    path = path or PROFILE_SEED_PATH
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        log.warning("Ignoring %s: expected a mapping, got %s", path.name, type(data).__name__)
        return {}
    return data


def ensure_dirs() -> None:
    for d in (DATA_DIR, EXPORT_DIR):
        d.mkdir(parents=True, exist_ok=True)
