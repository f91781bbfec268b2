import os
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

load_dotenv()


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    backend_url: str = "http://localhost:8000"
    request_timeout: float = 30.0
    log_level: str = "INFO"
    cors_origins: tuple[str, ...] = ("http://localhost:8501",)


def get_settings() -> Settings:
    """Read settings from the environment (and .env)"""
    origins = os.getenv("DIAGRAM_CORS_ORIGINS", "http://localhost:8501")
    return Settings(
        backend_url=os.getenv("BACKEND_URL", "http://localhost:8000").rstrip("/"),
        request_timeout=float(os.getenv("REQUEST_TIMEOUT", "30")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
    )
