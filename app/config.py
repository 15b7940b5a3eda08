from pydantic_settings import BaseSettings
from pydantic import ConfigDict, field_validator


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./postboard.db"

    # JWT
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    # Mail channel for notifications
    EMAIL_HOST: str = "localhost"
    EMAIL_PORT: int = 587
    EMAIL_USERNAME: str = ""
    EMAIL_PASSWORD: str = ""
    EMAIL_FROM: str = "no-reply@postboard.local"
    MAIL_ENABLED: bool = True

    # Public prefix for stored post images
    STORAGE_URL: str = "http://localhost:8000/storage/"

    # Background jobs: "thread" runs on a worker thread, "sync" runs inline
    QUEUE_CONNECTION: str = "thread"
    JOB_QUEUE_MAXSIZE: int = 1000

    IMPORT_HTTP_TIMEOUT: float = 10.0

    RATELIMIT_ENABLED: bool = True

    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"

    @field_validator("QUEUE_CONNECTION")
    @classmethod
    def check_queue_connection(cls, v):
        v = v.lower()
        if v not in ("thread", "sync"):
            raise ValueError(f"QUEUE_CONNECTION must be 'thread' or 'sync', got {v!r}")
        return v

    model_config = ConfigDict(env_file=".env")


settings = Settings()
