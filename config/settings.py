"""
Configuration settings - edit values directly here
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Settings:
    """Application settings - configure values below"""

    # ===================
    # Ledger service
    # ===================
    ledger_url: str = "ws://localhost:3030"
    ledger_username: Optional[str] = None
    ledger_password: Optional[str] = None
    request_timeout: float = 30.0
    max_message_size: int = 16 * 1024 * 1024

    # ===================
    # Account
    # ===================
    account_address: Optional[str] = None
    account_private_key: Optional[str] = None  # never commit a real key

    # ===================
    # Record search
    # ===================
    default_start_height: int = 0


# Global settings instance - import this
settings = Settings()
