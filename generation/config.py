"""
Runtime configuration for the study helper backend.

Values come from the process environment (a local .env file is loaded by
study_api before this is read). The resulting Settings object is immutable
and passed explicitly to the orchestrator and the app factory.
"""

import os
from dataclasses import dataclass
from typing import Optional

# ── Document modes ─────────────────────────────────────────────────────────────
MODE_TEXT = "text"          # raw generated text only
MODE_COMBINED = "combined"  # one PDF with the whole text
MODE_SPLIT = "split"        # separate notes and question-paper PDFs

DOCUMENT_MODES = (MODE_TEXT, MODE_COMBINED, MODE_SPLIT)


@dataclass(frozen=True)
class Settings:
    openai_api_key: Optional[str] = None
    gpt_model: str = "gpt-4o-mini"
    max_tokens: int = 4000
    temperature: float = 0.7
    allowed_origin: str = "https://tapiso-banks.github.io"
    document_mode: str = MODE_SPLIT
    port: int = 3000
    log_level: str = "INFO"

    def __post_init__(self):
        if self.document_mode not in DOCUMENT_MODES:
            raise ValueError(
                f"DOCUMENT_MODE must be one of {', '.join(DOCUMENT_MODES)}, "
                f"got {self.document_mode!r}"
            )


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return float(raw)


def load_settings() -> Settings:
    """Build Settings from environment variables."""
    defaults = Settings()
    return Settings(
        openai_api_key=os.getenv("OPENAI_API_KEY") or None,
        gpt_model=os.getenv("GPT_MODEL", defaults.gpt_model),
        max_tokens=_env_int("GPT_MAX_TOKENS", defaults.max_tokens),
        temperature=_env_float("GPT_TEMPERATURE", defaults.temperature),
        allowed_origin=os.getenv("ALLOWED_ORIGIN", defaults.allowed_origin),
        document_mode=os.getenv("DOCUMENT_MODE", defaults.document_mode).strip().lower(),
        port=_env_int("PORT", defaults.port),
        log_level=os.getenv("LOG_LEVEL", defaults.log_level).upper(),
    )
