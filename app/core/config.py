from pydantic import BaseModel
import os
from typing import Optional
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseModel):
    database_url: str
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    jwt_expires_minutes: int = 60
    frontend_base_url: str = "http://localhost:8080"
    log_level: str = "INFO"
    approval_actor_label: str = "admin"
    landing_announcement_limit: int = 10


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        database_url = os.getenv("DATABASE_URL", "")
        jwt_secret_key = os.getenv("JWT_SECRET_KEY", "")
        if not jwt_secret_key:
            raise RuntimeError("JWT_SECRET_KEY is not set")
        _settings = Settings(
            database_url=database_url,
            jwt_secret_key=jwt_secret_key,
            jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
            jwt_expires_minutes=int(os.getenv("JWT_EXPIRES_MINUTES", "60")),
            frontend_base_url=os.getenv("FRONTEND_BASE_URL", "http://localhost:8080"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            approval_actor_label=os.getenv("APPROVAL_ACTOR_LABEL", "admin"),
            landing_announcement_limit=int(os.getenv("LANDING_ANNOUNCEMENT_LIMIT", "10")),
        )
    return _settings
