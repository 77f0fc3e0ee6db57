# backend/homeprojects/config.py
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# 既知のスロット → エクスポート時のファイル名
DEFAULT_SLOT_NAMES: Dict[str, str] = {
    "p1-dishwasher-latch": "dishwasher-door-latch",
    "p2-humidifier": "furnace-humidifier",
    "p3-sharkbite-connection": "fridge-sharkbite-connection",
    "p4-laundry-current": "laundry-room-current",
    "p4-laundry-planned": "laundry-room-planned",
    "p5-sink-faucet": "bathroom-sink-faucet",
}

DEFAULT_PROJECT_NAMES: Dict[str, str] = {
    "p1-dishwasher-latch": "Project1-Dishwasher",
    "p2-humidifier": "Project2-Humidifier",
    "p3-sharkbite-connection": "Project3-FridgeWater",
    "p4-laundry-current": "Project4-LaundryRoom",
    "p4-laundry-planned": "Project4-LaundryRoom",
    "p5-sink-faucet": "Project5-BathroomSink",
}

ALLOWED_CONTENT_TYPES: List[str] = [
    "image/jpeg",
    "image/png",
    "image/gif",
    "image/webp",
    "image/heic",
    "image/heif",
]


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    api_title: str = "Home Projects API"
    api_version: str = "0.1.0"

    # Storage
    data_dir: Path = Field(default=Path("./data"))
    database_filename: str = "projects.db"
    uploads_dirname: str = "uploads"
    database_url_override: Optional[str] = Field(default=None, alias="DATABASE_URL")
    static_dir: Path = Field(default=Path("./public"))

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])

    # Upload / normalization
    max_upload_bytes: int = 10 * 1024 * 1024  # 10MB
    allowed_content_types: List[str] = Field(default_factory=lambda: list(ALLOWED_CONTENT_TYPES))
    max_dimension: int = 1920
    jpeg_quality: int = 85

    # Export
    zip_compression_level: int = 5
    slot_names: Dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_SLOT_NAMES))
    project_names: Dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_PROJECT_NAMES))
    default_project_name: str = "HomeProject"

    @property
    def database_path(self) -> Path:
        return self.data_dir / self.database_filename

    @property
    def uploads_dir(self) -> Path:
        return self.data_dir / self.uploads_dirname

    @property
    def database_url(self) -> str:
        # DATABASE_URL が指定されていれば優先
        if self.database_url_override:
            return self.database_url_override
        return f"sqlite:///{self.database_path}"

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


def get_settings() -> Settings:
    return Settings()
