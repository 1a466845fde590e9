from __future__ import annotations

import os
from typing import Optional


class Settings:
    APP_NAME: str = os.getenv("APP_NAME", "Generic Model")

    # Encryption key used by "encrypted" casts (supports the "base64:" prefix)
    APP_KEY: Optional[str] = os.getenv("APP_KEY")

    # Dates
    DATE_FORMAT: str = os.getenv("DATE_FORMAT", "%d/%m/%Y %H:%M:%S")
    APP_TIMEZONE: str = os.getenv("APP_TIMEZONE", "UTC")

    # Mass assignment
    PREVENT_SILENTLY_DISCARDING_ATTRIBUTES: bool = (
        os.getenv("PREVENT_SILENTLY_DISCARDING_ATTRIBUTES", "false").lower() == "true"
    )


settings = Settings()
