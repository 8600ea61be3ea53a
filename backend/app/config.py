from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    DATABASE_URL: str = "sqlite:///./airdefense.db"
    LOG_LEVEL: str = "INFO"
    VERSION: str = "0.1.0"
    # Seed data for `airdefense start` (radars, rules, missiles)
    DEFAULTS_CONFIG: str = "config/defaults.yaml"
    # Inventory cap enforced by POST /missiles/add
    MAX_MISSILES: int = 16
    # Connection pool
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    # API authentication (if unset, all requests pass)
    AIRDEFENSE_API_KEY: str | None = None
    # CORS origins (comma-separated string for env var support)
    CORS_ORIGINS: str = "http://localhost:3000"
    RATE_LIMIT_DEFAULT: str = "120/minute"
    RATE_LIMIT_ENABLED: bool = True


settings = Settings()
