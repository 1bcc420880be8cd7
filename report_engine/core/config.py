from typing import Optional
from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ReportSettings(BaseSettings):
    """Report layout and rendering settings."""

    model_config = SettingsConfigDict(env_prefix="REPORT_", extra="ignore")

    default_decimals: int = Field(default=2, ge=0, le=6)
    timestamp_format: str = Field(default="%d %b %Y %H:%M")
    timezone: str = Field(default="UTC")
    max_sheet_title_length: int = Field(default=31)

    # Theme colors (RGB hex, no leading '#')
    brand_color_dark: str = Field(default="005E54")   # title row
    brand_color_medium: str = Field(default="0F766E")  # header row
    brand_color_light: str = Field(default="F0FDF4")   # zebra stripe
    text_white: str = Field(default="FFFFFF")
    text_muted: str = Field(default="64748B")
    border_color: str = Field(default="CBD5E1")

    zebra_striping: bool = Field(default=True)
    freeze_header: bool = Field(default=True)
    auto_filter: bool = Field(default=True)
    min_column_width: int = Field(default=10)
    max_column_width: int = Field(default=50)


class ExportSettings(BaseSettings):
    """Export output settings."""

    model_config = SettingsConfigDict(env_prefix="EXPORT_", extra="ignore")

    default_format: str = Field(default="xlsx")
    output_dir: str = Field(default="./exports")
    filename_timestamp_format: str = Field(default="%Y%m%d_%H%M%S")


class LoggingSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="LOG_", extra="ignore")

    level: str = Field(default="INFO")
    json_format: bool = Field(default=False)
    format: str = Field(default="%(asctime)s - %(levelname)s - %(name)s - %(message)s")
    file_path: Optional[str] = Field(default=None)
    max_bytes: int = Field(default=10 * 1024 * 1024)
    backup_count: int = Field(default=5)


class Settings(BaseSettings):
    project_name: str = Field(default="Report Engine")
    version: str = Field(default="1.0.0")
    debug: bool = Field(default=False)
    environment: str = Field(default="development")
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)

    report: ReportSettings = Field(default_factory=ReportSettings)
    export: ExportSettings = Field(default_factory=ExportSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(env_file=".env", extra="allow", env_file_encoding="utf-8")

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
