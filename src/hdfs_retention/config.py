"""Configuration management using pydantic-settings."""

import re
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .adapters.hadoop.cli import DEFAULT_TIMEOUT
from .domain.listing import is_valid_filename
from .domain.models import DEFAULT_ROOT, MAX_BATCH_SIZE, RetentionPolicy

try:
    import tomllib
except ImportError:
    import tomli as tomllib

CONFIG_PATH = Path("~/.config/hdfs-retention/config.toml").expanduser()
MAX_TIMEOUT = 86400


class RetentionConfig(BaseSettings):
    """What to prune and how."""

    model_config = SettingsConfigDict(env_prefix="HDFS_RETENTION_")

    days: int = Field(default=0, ge=0, le=3650)
    hours: int = Field(default=0, ge=0, le=23)
    mins: int = Field(default=0, ge=0, le=59)
    paths: list[str] = []
    include: re.Pattern[str] | None = None
    exclude: re.Pattern[str] | None = None
    batch: int = Field(default=0, ge=0, le=MAX_BATCH_SIZE)
    rm: bool = False
    skip_trash: bool = False

    @field_validator("paths")
    @classmethod
    def check_paths(cls, v: list[str]) -> list[str]:
        for path in v:
            if not path or not is_valid_filename(path) or "'" in path or '"' in path:
                raise ValueError(f"invalid path: {path!r}")
        return v

    def to_policy(self) -> RetentionPolicy:
        """Build the immutable run policy. Raises PolicyError."""
        return RetentionPolicy(
            days=self.days,
            hours=self.hours,
            mins=self.mins,
            include=self.include,
            exclude=self.exclude,
            batch_size=self.batch,
            dry_run=not self.rm,
            skip_trash=self.skip_trash,
            roots=tuple(self.paths) or (DEFAULT_ROOT,),
        )


class HadoopConfig(BaseSettings):
    """External hadoop program settings."""

    model_config = SettingsConfigDict(env_prefix="HDFS_RETENTION_HADOOP_")

    bin: str = "hadoop"
    timeout: int = Field(default=DEFAULT_TIMEOUT, ge=1, le=MAX_TIMEOUT)

    @field_validator("bin")
    @classmethod
    def check_bin(cls, v: str) -> str:
        if Path(v).name != "hadoop":
            raise ValueError(f"invalid hadoop program '{v}' given, should be called hadoop!")
        return v


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="HDFS_RETENTION_")

    retention: RetentionConfig = Field(default_factory=RetentionConfig)
    hadoop: HadoopConfig = Field(default_factory=HadoopConfig)


def load_settings(
    config_path: Path | None = None,
    retention: dict[str, Any] | None = None,
    hadoop: dict[str, Any] | None = None,
) -> Settings:
    """Load settings from TOML file, falling back to defaults.

    Keyword overrides (typically from CLI flags) win over the file.
    """
    path = config_path or CONFIG_PATH
    data: dict[str, Any] = {}

    if path.exists():
        with open(path, "rb") as f:
            data = tomllib.load(f)

    return Settings(
        retention=RetentionConfig(**{**data.get("retention", {}), **(retention or {})}),
        hadoop=HadoopConfig(**{**data.get("hadoop", {}), **(hadoop or {})}),
    )
