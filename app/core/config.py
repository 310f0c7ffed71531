import json
from typing import Annotated, List
from pydantic_settings import BaseSettings, NoDecode
from pydantic import validator


class Settings(BaseSettings):
    PROJECT_NAME: str = "Case Diary API"
    VERSION: str = "1.0.0"
    DESCRIPTION: str = "Court case dates, statuses and history for a legal diary"
    API_V1_STR: str = "/api/v1"

    # CORS
    # Comma-separated or JSON list; NoDecode hands the raw env string to the validator
    BACKEND_CORS_ORIGINS: Annotated[List[str], NoDecode] = [
        "http://localhost:3000",  # Frontend development
        "http://localhost:8080",  # Vite dev server
        "http://localhost:8000",  # Backend development
    ]

    # Database (only used to create the tables)
    DATABASE_URL: str = ""

    # Supabase
    SUPABASE_URL: str
    SUPABASE_KEY: str
    SUPABASE_JWT_SECRET: str = ""
    SUPABASE_TIMEOUT: int = 10

    # Storage
    STORAGE_BUCKET: str = "case-documents"
    SIGNED_URL_EXPIRES_IN: int = 3600  # 1 hour

    # Case store: "supabase" or "local"
    CASE_STORE: str = "supabase"
    LOCAL_STORE_PATH: str = "data/cases.json"

    # Dashboard
    UPCOMING_WINDOW_DAYS: int = 7

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = ""

    # Performance
    ENABLE_RESPONSE_COMPRESSION: bool = True

    @validator("BACKEND_CORS_ORIGINS", pre=True)
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, str):
            return json.loads(v)
        elif isinstance(v, list):
            return v
        raise ValueError(v)

    @validator("CASE_STORE")
    def validate_case_store(cls, v: str) -> str:
        v = v.lower()
        if v not in ("supabase", "local"):
            raise ValueError(f"CASE_STORE must be 'supabase' or 'local', got {v!r}")
        return v

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
