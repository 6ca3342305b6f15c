"""Template generator configuration — loaded from environment / .env file."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="TEMPLATE_GENERATOR_", extra="ignore"
    )

    env: str = "development"
    database_url: str = "sqlite+aiosqlite:///./template_generator.db"
    log_level: str = "INFO"

    # Directory scanned for bundled *.yml.tmpl templates
    templates_dir: Path = Path("templates")
    sync_templates_on_startup: bool = True

    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:3001"]

    # Template limits
    max_template_size: int = 100 * 1024  # bytes of template body

    # Fire-and-forget download counter updates after a successful generate
    usage_tracking_enabled: bool = True

    @property
    def is_development(self) -> bool:
        return self.env == "development"


settings = Settings()
