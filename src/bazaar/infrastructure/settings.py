from decimal import Decimal
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="BAZAAR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Storage (JSON files, one per aggregate)
    DATA_DIR: Path = Path("data")

    # Pricing
    DEFAULT_COMMISSION_PERCENT: Decimal = Decimal("10")
    PICKUP_FEE: Decimal = Decimal("0")
    STANDARD_DELIVERY_FEE: Decimal = Decimal("300")
    EXPRESS_DELIVERY_FEE: Decimal = Decimal("500")

    # Earnings: days a completed sale is held before it can be withdrawn
    HOLD_PERIOD_DAYS: int = 0

    LOG_LEVEL: str = "INFO"


def get_settings() -> Settings:
    return Settings()
