"""Application configuration helpers."""

from dataclasses import dataclass
import logging
import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv


load_dotenv()


@dataclass
class Settings:
    """Holds runtime configuration loaded from the environment."""

    supabase_url: Optional[str] = None
    supabase_anon_key: Optional[str] = None
    tc_import_function: str = "import-travel-compositor"
    tc_import_timeout: float = 30.0
    log_level: str = "INFO"

    @property
    def tc_import_url(self) -> Optional[str]:
        if not self.supabase_url:
            return None
        return f"{self.supabase_url.rstrip('/')}/functions/v1/{self.tc_import_function}"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load and cache settings so every module shares the same values."""

    timeout = os.getenv("TC_IMPORT_TIMEOUT")
    try:
        timeout_seconds = float(timeout) if timeout else 30.0
    except ValueError as exc:
        raise ValueError(f"TC_IMPORT_TIMEOUT must be a number, got {timeout!r}.") from exc

    return Settings(
        supabase_url=os.getenv("SUPABASE_URL"),
        supabase_anon_key=os.getenv("SUPABASE_ANON_KEY"),
        tc_import_function=os.getenv("TC_IMPORT_FUNCTION", "import-travel-compositor"),
        tc_import_timeout=timeout_seconds,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


def configure_logging() -> None:
    """Apply the configured log level for CLI and API entry points."""

    logging.basicConfig(
        level=get_settings().log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
