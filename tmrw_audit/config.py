"""Configuration for tmrw-audit."""

from typing import Annotated

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode

DEFAULT_FILE_PATTERNS: list[str] = [
    "**/*.tf",
    "**/*.yml",
    "**/*.yaml",
    "**/*.json",
    "**/Dockerfile",
    "**/package.json",
    "!node_modules/**",
    "!dist/**",
    "!build/**",
    "!vendor/**",
]


class Settings(BaseSettings):
    """Application settings with TMRW_ environment variable overrides."""

    # Discovery: TMRW_FILE_PATTERNS is comma-separated, e.g. "**/*.tf,!vendor/**"
    file_patterns: Annotated[list[str], NoDecode] = DEFAULT_FILE_PATTERNS

    # Reports
    report_path: str = "./tmrw-audit-report.json"

    # Diagnostics
    debug: bool = False
    verbose: bool = False

    # Per-file extractor timeout in seconds (0 = wait forever)
    file_timeout_seconds: float = 0.0

    model_config = {"env_prefix": "TMRW_", "env_file": ".env", "extra": "ignore"}

    @field_validator("file_patterns", mode="before")
    @classmethod
    def split_file_patterns(cls, value):
        if isinstance(value, str):
            return [pattern.strip() for pattern in value.split(",") if pattern.strip()]
        return value


settings = Settings()
