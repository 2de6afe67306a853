"""
Centralized configuration with environment variable overrides.

Business copy, reply pacing, FAQ matching weights, and the reference
data source are all configurable here. Nothing is hardcoded in the
router, tools, or session logic.
"""

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from barberbot.logging_context import SessionIdFilter

load_dotenv()

logger = logging.getLogger(__name__)

DATA_SOURCES = ("json", "supabase")
LOG_FORMAT = "%(asctime)s [%(name)s] [%(session_id)s] %(levelname)s: %(message)s"


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


def _safe_float(env_var: str, default: str) -> float:
    """Parse a float from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return float(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid float for {env_var}: {raw!r}"
        ) from None


def _safe_bool(env_var: str, default: str) -> bool:
    """Parse a boolean flag (true/false, 1/0, yes/no) from an env var."""
    raw = os.getenv(env_var, default).strip().lower()
    if raw in ("1", "true", "yes", "on"):
        return True
    if raw in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"Invalid boolean for {env_var}: {raw!r}")


@dataclass(frozen=True)
class BusinessConfig:
    """Business-specific settings loaded from environment or defaults."""

    name: str = os.getenv("BUSINESS_NAME", "EliteCuts")
    booking_path: str = os.getenv("BOOKING_PATH", "/booking")


@dataclass(frozen=True)
class TimingConfig:
    """Artificial delays that pace bot replies, in seconds."""

    typing_delay_sec: float = _safe_float("TYPING_DELAY", "1.0")
    follow_up_delay_sec: float = _safe_float("FOLLOW_UP_DELAY", "1.0")
    navigation_delay_sec: float = _safe_float("NAVIGATION_DELAY", "1.5")


@dataclass(frozen=True)
class MatchingConfig:
    """FAQ relevance scoring weights and thresholds."""

    faq_min_score: int = _safe_int("FAQ_MIN_SCORE", "2")
    faq_question_weight: int = _safe_int("FAQ_QUESTION_WEIGHT", "10")
    faq_answer_weight: int = _safe_int("FAQ_ANSWER_WEIGHT", "5")
    faq_min_word_length: int = _safe_int("FAQ_MIN_WORD_LENGTH", "3")


@dataclass(frozen=True)
class DataConfig:
    """Where the reference records come from."""

    source: str = os.getenv("DATA_SOURCE", "json")
    path: str = os.getenv("DATA_PATH", "")
    supabase_url: str = os.getenv("SUPABASE_URL", "")
    supabase_key: str = os.getenv("SUPABASE_KEY", "")
    request_timeout_sec: float = _safe_float("REQUEST_TIMEOUT", "10.0")


@dataclass(frozen=True)
class DialogueConfig:
    """Conversation-context behaviour switches."""

    clear_booking_context_on_confirm: bool = _safe_bool(
        "CLEAR_BOOKING_CONTEXT_ON_CONFIRM", "false"
    )


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    business: BusinessConfig = field(default_factory=BusinessConfig)
    timing: TimingConfig = field(default_factory=TimingConfig)
    matching: MatchingConfig = field(default_factory=MatchingConfig)
    data: DataConfig = field(default_factory=DataConfig)
    dialogue: DialogueConfig = field(default_factory=DialogueConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    if not config.business.name.strip():
        raise ValueError("BUSINESS_NAME must not be empty")

    for delay_name, delay_value in [
        ("TYPING_DELAY", config.timing.typing_delay_sec),
        ("FOLLOW_UP_DELAY", config.timing.follow_up_delay_sec),
        ("NAVIGATION_DELAY", config.timing.navigation_delay_sec),
    ]:
        if delay_value < 0:
            raise ValueError(f"{delay_name} must be >= 0, got {delay_value}")

    if config.matching.faq_min_score < 1:
        raise ValueError(
            f"FAQ_MIN_SCORE must be >= 1, got {config.matching.faq_min_score}"
        )
    if config.matching.faq_question_weight < 0 or config.matching.faq_answer_weight < 0:
        raise ValueError("FAQ_QUESTION_WEIGHT and FAQ_ANSWER_WEIGHT must be >= 0")
    if config.matching.faq_min_word_length < 1:
        raise ValueError(
            "FAQ_MIN_WORD_LENGTH must be >= 1, "
            f"got {config.matching.faq_min_word_length}"
        )

    if config.data.source not in DATA_SOURCES:
        raise ValueError(
            f"DATA_SOURCE must be one of {list(DATA_SOURCES)}, got {config.data.source!r}"
        )
    if config.data.source == "supabase" and not (
        config.data.supabase_url and config.data.supabase_key
    ):
        raise ValueError("SUPABASE_URL and SUPABASE_KEY are required when DATA_SOURCE=supabase")
    if config.data.request_timeout_sec <= 0:
        raise ValueError(
            f"REQUEST_TIMEOUT must be > 0, got {config.data.request_timeout_sec}"
        )


def _configure_logging(level: str) -> None:
    """Configure root logging and tag every line with the chat session id."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    for handler in logging.getLogger().handlers:
        if not any(isinstance(f, SessionIdFilter) for f in handler.filters):
            handler.addFilter(SessionIdFilter())


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    _configure_logging(config.log_level)
    logger.info("Configuration loaded for '%s'", config.business.name)
    return config


# Singleton instance
settings = load_config()
