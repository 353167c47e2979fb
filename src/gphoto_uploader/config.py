"""
Configuration management using Pydantic for validation.

Supports loading from:
- YAML files
- Environment variables with GPHOTO_UPLOADER_ prefix

OAuth credentials live in their own JSON file (see load_credentials) so the
YAML config can be shared without leaking secrets.
"""

import json
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from gphoto_uploader.exceptions import AuthError


class EndpointSettings(BaseModel):
    """Google endpoints used by the token manager and the uploader."""

    token_endpoint: str = Field(
        default="https://www.googleapis.com/oauth2/v4/token",
        description="OAuth2 token endpoint used to exchange the refresh token",
    )
    upload_endpoint: str = Field(
        default="https://photoslibrary.googleapis.com/v1/uploads",
        description="Raw byte upload endpoint (phase 1)",
    )
    batch_create_endpoint: str = Field(
        default="https://photoslibrary.googleapis.com/v1/mediaItems:batchCreate",
        description="Media item creation endpoint (phase 2)",
    )

    @field_validator("token_endpoint", "upload_endpoint", "batch_create_endpoint")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Endpoints must be absolute http(s) URLs."""
        if not v.startswith(("https://", "http://")):
            raise ValueError(f"endpoint must be an http(s) URL: {v}")
        return v


class Credentials(BaseModel):
    """OAuth refresh-token credentials read from the credentials file."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    refresh_token: str = Field(min_length=1)
    client_id: str = Field(min_length=1)
    client_secret: str = Field(min_length=1)
    expires_in: float = Field(
        gt=0,
        description="Initial access token lifetime in seconds",
    )


def load_credentials(path: Path | str) -> Credentials:
    """
    Load OAuth credentials from a JSON file.

    Args:
        path: Path to a JSON object with refresh_token, client_id,
            client_secret and expires_in

    Returns:
        Credentials instance

    Raises:
        AuthError: If the file is missing, is not JSON or lacks a required field.
            All four fields are required; there is no default expiry.
    """
    path = Path(path)
    try:
        raw = path.read_text()
    except FileNotFoundError as e:
        raise AuthError(f"Credentials file not found: {path}") from e
    except OSError as e:
        raise AuthError(f"Could not read credentials file {path}: {e}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise AuthError(f"Credentials file is not valid JSON: {path}: {e}") from e

    if not isinstance(data, dict):
        raise AuthError(f"Credentials file must contain a JSON object: {path}")

    try:
        return Credentials(**data)
    except ValidationError as e:
        raise AuthError(f"Malformed credentials file {path}: {e}") from e


class Settings(BaseSettings):
    """
    Main application settings.

    Can be loaded from:
    - YAML file: Settings.from_yaml("config.yaml")
    - Environment variables: GPHOTO_UPLOADER_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix="GPHOTO_UPLOADER_",
        env_nested_delimiter="__",
        extra="ignore",  # Ignore unknown fields for forward compatibility
    )

    credentials_path: Path = Field(
        default=Path("./credentials/tokens.json"),
        description="JSON file holding refresh_token, client_id, client_secret, expires_in",
    )
    endpoints: EndpointSettings = Field(
        default_factory=EndpointSettings,
        description="Google API endpoints",
    )
    request_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Deadline applied to every HTTP request",
    )
    on_failure: Literal["abort", "continue"] = Field(
        default="abort",
        description="What to do when a photo fails to upload: stop the run or skip to the next",
    )
    image_extensions: list[str] = Field(
        default_factory=lambda: [".png", ".jpg"],
        description="File extensions treated as photos (case-insensitive)",
    )
    delete_source_after_upload: bool = Field(
        default=False,
        description="Delete source image after a successful upload. "
        "WARNING: Destructive - files are permanently deleted!",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )

    @field_validator("credentials_path", mode="before")
    @classmethod
    def parse_credentials_path(cls, v):
        """Convert string path to Path object."""
        if isinstance(v, str):
            return Path(v)
        return v

    @field_validator("image_extensions")
    @classmethod
    def normalize_extensions(cls, v: list[str]) -> list[str]:
        """Lowercase extensions and make sure each starts with a dot."""
        result = []
        for ext in v:
            ext = ext.strip().lower()
            if not ext:
                raise ValueError("image_extensions must not contain empty entries")
            if not ext.startswith("."):
                ext = f".{ext}"
            result.append(ext)
        if not result:
            raise ValueError("image_extensions must not be empty")
        return result

    @property
    def continue_on_error(self) -> bool:
        return self.on_failure == "continue"

    @classmethod
    def from_yaml(cls, path: Path | str) -> "Settings":
        """
        Load settings from a YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            Settings instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)

    def to_yaml(self, path: Path | str) -> None:
        """Save settings to a YAML file."""
        path = Path(path)

        data = self.model_dump()
        data["credentials_path"] = str(self.credentials_path)

        with open(path, "w") as f:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
