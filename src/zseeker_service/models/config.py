"""
Pydantic configuration model for zseeker-service.

Configuration can be loaded from a YAML file or built from CLI options;
every field has a default so the service starts without a config file.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError

from zseeker_service.core.exceptions import ConfigurationError
from zseeker_service.external.zseeker import RESULT_SUFFIX

logger = logging.getLogger(__name__)

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class ServiceConfig(BaseModel):
    """
    Runtime configuration for the job service.

    Attributes:
        work_dir: Parent directory for per-job workspaces.
        upload_filename: Name the uploaded FASTA is stored under.
        result_suffix: Suffix ZSeeker appends to the FASTA stem for its CSV.
        tool_timeout_seconds: Kill ZSeeker after this many seconds
            (None waits indefinitely).
        keep_workspaces: Keep job directories after the response is sent.
        host: Interface the HTTP server binds to.
        port: Port the HTTP server listens on.
        cors_allow_origins: Origins allowed by the CORS middleware.
        log_level: Logging level for the service.
    """

    work_dir: Path = Field(
        default=Path("./jobs"),
        description="Parent directory for per-job workspaces",
    )
    upload_filename: str = Field(
        default="input.fasta",
        min_length=1,
        pattern=r"^[\w\-.]+$",
        description="File name the uploaded FASTA is stored under",
    )
    result_suffix: str = Field(
        default=RESULT_SUFFIX,
        min_length=1,
        description="Suffix ZSeeker appends to the FASTA stem for its result CSV",
    )
    tool_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Kill ZSeeker after this many seconds (None waits indefinitely)",
    )
    keep_workspaces: bool = Field(
        default=False,
        description="Keep job directories after the response is sent",
    )
    host: str = Field(default="0.0.0.0", description="HTTP bind address")
    port: int = Field(default=8080, ge=1, le=65535, description="HTTP port")
    cors_allow_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed by the CORS middleware",
    )
    log_level: LogLevel = Field(default="INFO", description="Logging level")

    model_config = {"frozen": True}

    @classmethod
    def from_yaml(cls, path: Path) -> ServiceConfig:
        """
        Load service configuration from a YAML file.

        Unknown keys are ignored (forward compatibility); missing keys keep
        their defaults.

        Args:
            path: Path to YAML configuration file.

        Returns:
            ServiceConfig populated from YAML values merged with defaults.

        Raises:
            FileNotFoundError: If YAML file does not exist.
            ConfigurationError: If the YAML is not a mapping or has invalid values.
        """
        raw = yaml.safe_load(path.read_text())
        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ConfigurationError(
                f"YAML config must be a mapping, got {type(raw).__name__}",
                suggestion=f"Write {path.name} as 'key: value' lines.",
            )

        known = {k: v for k, v in raw.items() if k in cls.model_fields}
        ignored = sorted(set(raw) - set(known))
        if ignored:
            logger.warning("Ignoring unknown config keys: %s", ", ".join(ignored))

        try:
            return cls(**known)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid configuration in {path}:\n{e}",
                suggestion="Fix the listed keys or remove them to use defaults.",
            ) from e

    def with_overrides(self, **overrides: Any) -> ServiceConfig:
        """Return a copy with the non-None overrides applied."""
        values = {k: v for k, v in overrides.items() if v is not None}
        if not values:
            return self
        try:
            return self.model_validate({**self.model_dump(), **values})
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration override:\n{e}") from e

    def to_yaml_str(self) -> str:
        """Serialize the configuration to a YAML string."""
        data = self.model_dump(mode="json")
        return yaml.dump(data, default_flow_style=False, sort_keys=False)
