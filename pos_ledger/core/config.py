from typing import List

from pydantic_settings import BaseSettings

from pos_ledger.core.money import RoundingPolicy


class Settings(BaseSettings):
    env: str = "dev"
    database_url: str = "sqlite:///./data/products.sqlite"
    backend_cors_origins: str = "http://localhost:1420,http://localhost:5173"
    log_level: str = "INFO"

    # Single rounding policy for every derived monetary amount
    money_rounding: RoundingPolicy = RoundingPolicy.FLOOR
    payments_page_size: int = 200

    @property
    def cors_origins(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        origins = self.backend_cors_origins
        return [origin.strip() for origin in origins.split(",") if origin.strip()]

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
