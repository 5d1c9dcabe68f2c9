import os
from dataclasses import dataclass
from decimal import Decimal

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


@dataclass
class Settings:
    # Lending rules
    loan_days: int = int(os.getenv("LIBRARY_LOAN_DAYS", "14"))
    daily_fine: Decimal = Decimal(os.getenv("LIBRARY_DAILY_FINE", "0.50"))
    max_borrowed: int = int(os.getenv("LIBRARY_MAX_BORROWED", "5"))

    # Startup data
    seed_sample_data: bool = _env_flag("LIBRARY_SEED_SAMPLE_DATA", "true")

    # Logging
    log_level: str = os.getenv("LIBRARY_LOG_LEVEL", "WARNING").upper()

    # CLI output: plain | json | rich
    output_mode: str = os.getenv("LIB_CLI_OUTPUT", "plain").lower()

    # Application
    app_name: str = os.getenv("APP_NAME", "Library Management System")
    app_version: str = os.getenv("APP_VERSION", "1.0.0")


settings = Settings()
