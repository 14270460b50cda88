"""
Configuration loading for casedata.

Settings live in an optional ``casedata.yaml`` file, found by walking up
from the working directory.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

CONFIG_FILENAME = "casedata.yaml"


class CaseDataConfig(BaseModel):
    """Settings controlling where and how fixture files are read."""

    model_config = {"frozen": True, "extra": "forbid"}

    fixtures_dir: Path = Field(
        default=Path("fixtures"),
        description="Directory holding fixture files, relative to the config file",
    )
    suffixes: list[str] = Field(
        default_factory=lambda: [".yaml", ".yml", ".json"],
        description="File suffixes treated as fixture files",
    )
    encoding: str = Field(default="utf-8", description="Text encoding of fixture files")

    @field_validator("suffixes")
    @classmethod
    def suffixes_are_dotted(cls, v: list[str]) -> list[str]:
        """Normalize suffixes to lower-case with a leading dot."""
        if not v:
            raise ValueError("At least one fixture file suffix is required")
        normalized = []
        for suffix in v:
            suffix = suffix.strip().lower()
            if not suffix:
                raise ValueError("Fixture file suffixes must not be empty")
            normalized.append(suffix if suffix.startswith(".") else f".{suffix}")
        return normalized


class ConfigLoader:
    """Load and validate casedata configuration from YAML files."""

    @classmethod
    def from_yaml(cls, path: str | Path) -> CaseDataConfig:
        """
        Load configuration from a YAML file.

        A relative ``fixtures_dir`` is resolved against the file's directory.

        Args:
            path: Path to YAML configuration file

        Returns:
            CaseDataConfig loaded from file
        """
        path = Path(path)
        if not path.exists():
            msg = f"Configuration file not found: {path}"
            raise FileNotFoundError(msg)

        with path.open() as f:
            data = yaml.safe_load(f) or {}

        config = cls.from_dict(data)
        if not config.fixtures_dir.is_absolute():
            config = config.model_copy(
                update={"fixtures_dir": path.parent / config.fixtures_dir}
            )
        return config

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CaseDataConfig:
        """
        Create configuration from a dictionary.

        Args:
            data: Configuration dictionary

        Returns:
            CaseDataConfig from dictionary
        """
        return CaseDataConfig.model_validate(data)

    @classmethod
    def discover(cls, start: str | Path | None = None) -> CaseDataConfig:
        """
        Find ``casedata.yaml`` in ``start`` or any parent directory.

        Returns defaults (fixtures_dir relative to ``start``) when no file exists.
        """
        start_dir = Path(start) if start is not None else Path.cwd()
        for directory in [start_dir, *start_dir.parents]:
            candidate = directory / CONFIG_FILENAME
            if candidate.is_file():
                return cls.from_yaml(candidate)
        return CaseDataConfig(fixtures_dir=start_dir / "fixtures")

    @classmethod
    def generate_sample_config(cls) -> str:
        """
        Generate a sample YAML configuration file.

        Returns:
            YAML string for sample configuration
        """
        sample = {
            "fixtures_dir": "tests/fixtures",
            "suffixes": [".yaml", ".yml", ".json"],
            "encoding": "utf-8",
        }
        return yaml.dump(sample, default_flow_style=False, sort_keys=False)
