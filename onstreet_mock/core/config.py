from typing import List, Optional
from pydantic_settings import BaseSettings
from onstreet_mock.core.enums import PaymentMethod

class Settings(BaseSettings):
    PORT: int = 3000

    PUBLIC_URL: Optional[str] = None
    PUBLIC_URL_DEFAULT: str = "https://mock-mowiz.onrender.com"
    CONFIG_VERSION: int = 1

    CORS_ORIGINS: List[str] = [
        "https://jeffbozu.github.io",
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:8080",
    ]
    GZIP_MINIMUM_SIZE: int = 1000

    ZONES_FILE: Optional[str] = None
    LEDGER_SEED_PLATES: List[str] = ["1234ABC"]
    QUOTE_CACHE_ENABLED: bool = True

    TIME_ZONE: str = "Europe/Madrid"
    CURRENCY: str = "EUR"
    PAYMENT_METHODS: List[PaymentMethod] = [PaymentMethod.CASH, PaymentMethod.BIZUM, PaymentMethod.CARD]

    REDIS_URL: Optional[str] = None
    RATE_LIMIT: int = 100
    RATE_LIMIT_WINDOW: int = 600  # 10 minutes

    NOTIFY_WEBHOOK_URL: Optional[str] = None
    WEBHOOK_TIMEOUT: int = 10
    WEBHOOK_RETRIES: int = 3
    WEBHOOK_BACKOFF: float = 1.0

    API_TITLE: str = "Onstreet Mock Service"
    API_DESCRIPTION: str = "Mock zones, tariffs and ticket validation for the parking kiosk app"
    API_VERSION: str = "1.0.0"

    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
