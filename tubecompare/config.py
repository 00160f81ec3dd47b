from pathlib import Path
from typing import Annotated, Any, List, Optional

from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from .errors import ConfigurationError


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    youtube_api_key: str = Field(validation_alias=AliasChoices("youtube_api_key", "YOUTUBE_API_KEY", "API_KEY"))
    data_dir: Path = Path("data")
    max_results: int = Field(default=50, ge=1, le=50)
    # CORS_ORIGINS is comma-separated, not JSON
    cors_origins: Annotated[List[str], NoDecode] = ["*"]
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3000

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_origins(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [o.strip() for o in value.split(",") if o.strip()]
        return value

    @field_validator("log_level")
    @classmethod
    def upper_level(cls, value: str) -> str:
        return value.upper()

    @classmethod
    def from_env(cls, env_file: Optional[str] = ".env") -> "Settings":
        """
        Build settings from the process environment (and .env if present).
        The API key is mandatory: without it the server must not start.
        Any invalid value is just as fatal.
        """
        try:
            return cls(_env_file=env_file)
        except ValidationError as e:
            raise ConfigurationError(_describe(e)) from e


def _describe(e: ValidationError) -> str:
    problems = []
    for err in e.errors():
        if err["type"] == "missing":
            return "Missing YOUTUBE_API_KEY"
        where = ".".join(str(part) for part in err["loc"])
        problems.append(f"{where}: {err['msg']}")
    return "Invalid configuration: " + "; ".join(problems)
