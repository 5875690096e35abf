from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):

    database_url: str = "sqlite:///./fittrack.db"

    # Security
    secret_key: str
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 43200  # 30 days

    # Frontend URL allowed by CORS
    frontend_url: str = "http://localhost:5173"

    # Rate limiting (per client IP)
    login_rate_limit: int = 10
    register_rate_limit: int = 5
    rate_limit_window_seconds: int = 60

    # Calendar days are cut in this timezone
    timezone: str = "UTC"

    # Gamification
    xp_floor: int = 5
    xp_divisor: float = 2
    reference_weight_kg: float = 70

    # Logging
    log_level: str = "INFO"
    sql_echo: bool = False

    # Environment
    environment: str = "development"
    client_url: Optional[str] = None

    class Config:
        env_file = ".env"


settings = Settings()
