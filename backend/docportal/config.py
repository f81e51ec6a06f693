from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    data_dir: Path = Path.cwd() / "data"
    host: str = "127.0.0.1"
    # Listening port; DOCPORTAL_PORT or PORT overrides it.
    port: int = Field(default=5000, validation_alias=AliasChoices("DOCPORTAL_PORT", "PORT"))
    cors_origins: list[str] = [
        "http://127.0.0.1:5173",
        "http://localhost:5173",
        "http://localhost:3000",
    ]
    log_level: str = "INFO"

    @property
    def db_path(self) -> Path:
        return self.data_dir / "documents.db"

    @property
    def upload_dir(self) -> Path:
        return self.data_dir / "uploads"

    model_config = {"env_prefix": "DOCPORTAL_", "populate_by_name": True}


settings = Settings()
