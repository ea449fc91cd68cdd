from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./courses.db"
    REDIS_URL: str = "redis://localhost:6379/0"
    LOG_LEVEL: str = "INFO"
    CACHE_ENABLED: bool = True
    CACHE_TTL: int = 300  # 5 minutes
    PASSWORD_HASH_ROUNDS: int = 12
    AUTH_REALM: str = "courses-api"
    CORS_ORIGINS: list[str] = ["*"]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
