"""Runtime configuration — env-driven via pydantic-settings.

Reads from a .env file and STAKINGREWARDS_* environment variables.
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class StakingSettings(BaseSettings):
    """Settings with environment variable overrides.

    Examples
    --------
    Override via environment::

        export STAKINGREWARDS_LOG_LEVEL=DEBUG
        export STAKINGREWARDS_JOURNAL_PATH=/data/events.db
        export STAKINGREWARDS_REWARDS_DURATION=604800

    Or via .env file::

        STAKINGREWARDS_ENVIRONMENT=production
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="STAKINGREWARDS_",
        env_file_encoding="utf-8",
    )

    # Runtime environment
    environment: str = "development"
    log_level: str = "INFO"
    debug: bool = False

    # Storage
    journal_path: Path = Path(".stakingrewards/events.db")

    # Pool defaults
    rewards_duration: int = 60 * 60 * 24 * 60  # 60 days
    start_delay: int = 86400  # pools open one day after creation
    pool_name: str = "Pool token"
    pool_symbol: str = "PPT"

    # Reward asset defaults
    reward_token_name: str = "Reward Token"
    reward_token_symbol: str = "RTOK"
    token_decimals: int = 18

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


# Module-level singleton: import as `from stakingrewards.config import config`
config = StakingSettings()
