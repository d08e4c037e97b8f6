"""Application settings, read from the environment."""

import logging
import os
from dataclasses import dataclass

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    database_url: str = "sqlite:///./tavli.db"
    db_echo: bool = False
    log_level: str = "INFO"
    ai_player_name: str = "computer"

    @classmethod
    def from_env(cls) -> "Settings":
        """Create settings from environment variables (prefixed with TAVLI_)."""
        return cls(
            database_url=os.getenv("TAVLI_DATABASE_URL", "sqlite:///./tavli.db"),
            db_echo=os.getenv("TAVLI_DB_ECHO", "false").lower() in ("true", "1", "yes"),
            log_level=os.getenv("TAVLI_LOG_LEVEL", "INFO").upper(),
            ai_player_name=os.getenv("TAVLI_AI_PLAYER_NAME", "computer"),
        )


def configure_logging(settings: Settings) -> None:
    """Set up the root logger once (format + level). Modules use logging.getLogger(__name__)."""
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
