"""Application configuration loaded from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "bilge-monitor"
    log_level: str = "INFO"

    # Polling loop
    poll_interval_ms: int = 50
    status_log_interval_ms: int = 10_000

    # Fixed timing constants of the state machine
    emergency_debounce_ms: int = 1000
    silence_hold_ms: int = 5000
    button_debounce_ms: int = 50

    # Boot-time threshold defaults (operator may change them at runtime)
    tier1_level_cm: float = 30.0
    tier2_level_cm: float = 50.0
    notif_interval_ms: int = 900_000
    horn_on_ms: int = 1000
    horn_off_ms: int = 1000

    model_config = {"env_prefix": "BILGE_"}


settings = Settings()
