# invaders/console/config.py
"""Terminal runtime settings, overridable via environment variables."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings for `python -m invaders.console`; env prefix INVADERS_."""

    # Game
    SEED: int | None = None

    # Frame loop
    MAX_FRAME_DT: float = 0.1
    IDLE_POLL_S: float = 0.005
    TARGET_FPS: float = 120.0  # 0 disables frame pacing

    # Input: a key counts as held while terminal auto-repeat reports it this often
    KEY_HOLD_S: float = 0.12

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Path = Path("invaders.log")

    model_config = SettingsConfigDict(env_prefix="INVADERS_", env_file=".env", extra="ignore")


settings = Settings()
