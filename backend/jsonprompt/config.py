import os
import logging
import pathlib
from dataclasses import dataclass, field
from typing import List, Optional
from urllib.parse import urlparse

import yaml

logger = logging.getLogger(__name__)

# Longest inputText / message accepted by /api/convert
MAX_INPUT_LENGTH = 10000

_URL_PLACEHOLDERS = ("your_supabase_project_url_here", "your-project-id")
_KEY_PLACEHOLDERS = ("your_supabase_anon_key",)


@dataclass(frozen=True)
class Settings:
    openai_api_key: Optional[str]
    openai_model: str
    openai_max_tokens: int
    supabase_url: Optional[str]
    supabase_anon_key: Optional[str]
    waitlist_table: str
    cors_allow_origins: List[str]
    log_level: str
    prompts: dict = field(default_factory=dict)

    @property
    def llm_configured(self) -> bool:
        return bool(self.openai_api_key)

    @property
    def database_configured(self) -> bool:
        url = self.supabase_url or ""
        key = self.supabase_anon_key or ""
        if not url or any(p in url for p in _URL_PLACEHOLDERS):
            return False
        if not _is_valid_url(url):
            return False
        if not key or any(p in key for p in _KEY_PLACEHOLDERS):
            return False
        return True


def load_settings() -> Settings:
    cors_env = os.getenv("CORS_ALLOW_ORIGINS", "*")
    cors = [o.strip() for o in cors_env.split(",") if o.strip()] or ["*"]
    model = os.getenv("OPENAI_MODEL", "gpt-4o")
    max_tokens_env = os.getenv("OPENAI_MAX_TOKENS")
    try:
        max_tokens = int(max_tokens_env) if max_tokens_env else 4096
    except ValueError:
        max_tokens = 4096
    return Settings(
        openai_api_key=os.getenv("OPENAI_API_KEY") or None,
        openai_model=model,
        openai_max_tokens=max_tokens,
        supabase_url=os.getenv("SUPABASE_URL") or os.getenv("NEXT_PUBLIC_SUPABASE_URL"),
        supabase_anon_key=os.getenv("SUPABASE_ANON_KEY") or os.getenv("NEXT_PUBLIC_SUPABASE_ANON_KEY"),
        waitlist_table=os.getenv("WAITLIST_TABLE", "waitlist"),
        cors_allow_origins=cors,
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        prompts=_load_prompts(),
    )


def _is_valid_url(url: str) -> bool:
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return parsed.scheme in {"http", "https"} and bool(parsed.netloc)


def _load_prompts() -> dict:
    # Look for prompts.yml in backend root (parent of jsonprompt/)
    backend_root = pathlib.Path(__file__).resolve().parents[1]
    prompts_path = pathlib.Path(os.getenv("PROMPTS_FILE", backend_root / "prompts.yml"))
    if not prompts_path.exists():
        return {}
    try:
        with open(prompts_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as exc:
        logger.warning("Ignoring unreadable prompts file %s: %s", prompts_path, exc)
        return {}
    if not isinstance(data, dict):
        return {}
    return data
