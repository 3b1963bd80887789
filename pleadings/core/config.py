"""
Settings for the pleadings toolkit.

Values come from the environment (``PLEADINGS_`` prefix) or a ``.env``
file in the working directory.
"""

from functools import lru_cache
from typing import Optional

from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from pleadings.core.errors import ConfigurationError
from pleadings.models.formatting import (
    FontRules,
    FormattingRules,
    HeaderRules,
    LineNumberRules,
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PLEADINGS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_level: str = "INFO"
    log_json: bool = False
    log_file: Optional[str] = None

    # Caption layout
    caption_column: int = 36

    # Export defaults
    font_family: str = "Times New Roman"
    font_size: float = 12
    line_spacing: float = 2.0
    line_numbers: bool = True
    line_numbers_restart_per_page: bool = True
    header_enabled: bool = True
    header_skip_first_page: bool = False


@lru_cache
def get_settings() -> Settings:
    return Settings()


def formatting_rules_from_settings(settings: Settings) -> FormattingRules:
    """Build export rules from settings; page geometry keeps the Indiana defaults."""
    try:
        return FormattingRules(
            font=FontRules(family=settings.font_family, size=settings.font_size),
            line_spacing=settings.line_spacing,
            line_numbers=LineNumberRules(
                enabled=settings.line_numbers,
                restart_per_page=settings.line_numbers_restart_per_page,
            ),
            header=HeaderRules(
                enabled=settings.header_enabled,
                skip_first_page=settings.header_skip_first_page,
            ),
        )
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid formatting settings: {exc.errors()[0]['msg']}") from exc
