from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Central configuration loaded from environment / .env file."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    # Probe / alert declarations (YAML)
    board_config_file: str = "board.yaml"

    # Scheduler
    probe_interval_seconds: float = 60.0

    # Defaults merged into each probe declaration
    default_warning_ms: int = 500
    default_fatal_ms: int = 10_000

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Logging
    log_level: str = "INFO"

    # Alert channel fallbacks (used when a declaration omits them)
    slack_webhook_url: str = ""
    telegram_bot_token: str = ""
    telegram_chat_id: str = ""
    discord_webhook_url: str = ""


settings = Settings()
