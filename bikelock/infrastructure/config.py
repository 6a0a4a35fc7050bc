from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str = "sqlite+pysqlite:///:memory:"
    openapi_path: Path = Path(__file__).resolve().parents[1] / "openapi/openapi.yaml"

    # Zone that defines "today" and the time of day attached to future bookings
    timezone: str = "UTC"

    # Tariffs (currency units per started block)
    billing_block_minutes: int = 30
    immediate_rate_per_block: int = 10
    scheduled_rate_per_block: int = 100

    booking_window_days: int = 5
    ride_history_capacity: int = 3
    default_booking_variant: Literal["immediate", "scheduled"] = "scheduled"

    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3000

    model_config = SettingsConfigDict(env_prefix="BIKELOCK_", env_file=".env", extra="ignore")


settings = Settings()
