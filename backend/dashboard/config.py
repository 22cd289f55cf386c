from pathlib import Path
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    data_path: Path = Path.home() / "ReviewsDashboard"
    uploads_url: str = "/uploads"
    items_per_page: int = 6
    # Keeps the listing offset inside a 64-bit SQLite INTEGER.
    max_page: int = 1_000_000
    images_limit: int = 1000
    latest_invoices_limit: int = 5
    # Reject oversized review images before decoding them.
    max_upload_bytes: int = 10 * 1024 * 1024  # 10 MiB
    session_ttl_seconds: int = 3600
    api_prefix: str = "/api/v1"
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"

    @property
    def db_path(self) -> Path:
        return self.data_path / "db.sqlite"

    @property
    def upload_dir(self) -> Path:
        return self.data_path / "uploads"

    model_config = {"env_prefix": "DASHBOARD_"}


settings = Settings()
