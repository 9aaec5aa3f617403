"""
Configuration Schema and Models

Defines Pydantic models for the configuration schema, providing validation,
default values, and type checking for all configuration options.

Author: Save Game Installer Project
License: MIT
"""

import os
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, validator
from pathlib import Path


class LogLevel(str, Enum):
    """Logging level options."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class NotificationLevel(str, Enum):
    """Notification kinds understood by notification sinks."""
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


def _default_fallback_root() -> str:
    return "C:\\" if os.name == "nt" else os.sep


class AppConfig(BaseModel):
    """Logging configuration for the process."""

    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Application logging level"
    )
    log_to_file: bool = Field(
        default=False,
        description="Enable logging to file"
    )
    log_file_path: str = Field(
        default="logs/save_installer.log",
        description="Path of the rotating log file"
    )
    log_rotation_size: int = Field(
        default=10485760,  # 10MB
        description="Log file size before rotation (bytes)"
    )
    log_retention_count: int = Field(
        default=5,
        description="Number of rotated log files to keep"
    )
    json_logs: bool = Field(
        default=False,
        description="Use JSON formatting for log output"
    )


class RelocationConfig(BaseModel):
    """How discovered saves are placed into the save directory."""

    move_instead_of_copy: bool = Field(
        default=True,
        description="Delete the source after a successful copy (cut)"
    )


class DiagnosticsConfig(BaseModel):
    """Run-log written under the documents folder while diagnosing."""

    enabled: bool = Field(
        default=False,
        description="Write sweep reports to the run-log and show debug toasts"
    )
    directory: str = Field(
        default="SGI_Diag",
        description="Run-log directory, relative to the documents folder"
    )
    file_name: str = Field(
        default="SGI_SaveMover_RunLog.txt",
        description="Run-log file name"
    )


class NotificationConfig(BaseModel):
    """User-visible notification settings."""

    enabled: bool = Field(
        default=True,
        description="Send notifications to the notification sink"
    )
    prefix: str = Field(
        default="[SGI]",
        description="Prefix prepended to every notification message"
    )
    display_ms: int = Field(
        default=6000,
        description="Advisory display duration for regular notifications"
    )
    debug_display_ms: int = Field(
        default=4500,
        description="Advisory display duration for diagnostic toasts"
    )


class SweepConfig(BaseModel):
    """Timing of sweep triggers."""

    startup_delay: float = Field(
        default=0.3,
        description="Seconds to wait before the startup sweep"
    )
    install_retry_delay: float = Field(
        default=1.2,
        description="Seconds to wait before retrying an install sweep that moved nothing"
    )

    @validator("startup_delay", "install_retry_delay")
    def validate_delay(cls, v):
        """Delays cannot be negative."""
        if v < 0:
            raise ValueError(f"Delay must not be negative: {v}")
        return v


class PathsConfig(BaseModel):
    """Known-folder overrides and fallbacks."""

    documents: Optional[str] = Field(
        default=None,
        description="Documents folder (None = use the user profile fallback)"
    )
    app_data: Optional[str] = Field(
        default=None,
        description="Package manager application data folder"
    )
    install: Optional[str] = Field(
        default=None,
        description="Currently active mod install (staging) folder"
    )
    app_data_subdir: str = Field(
        default="Vortex",
        description="Folder under %APPDATA% holding per-game staging folders"
    )
    user_profile_env: str = Field(
        default="USERPROFILE",
        description="Environment variable used when no documents folder is known"
    )
    fallback_root: str = Field(
        default_factory=_default_fallback_root,
        description="Last-resort documents root"
    )

    @validator("documents", "app_data", "install")
    def validate_paths(cls, v):
        """Ensure overrides are absolute."""
        if v is not None and not Path(v).is_absolute():
            raise ValueError(f"Folder override must be absolute: {v}")
        return v


class WatchConfig(BaseModel):
    """Staging folder monitoring used by the ``watch`` command."""

    enabled: bool = Field(
        default=True,
        description="Watch staging roots for newly extracted mod folders"
    )
    debounce_seconds: float = Field(
        default=5.0,
        description="Seconds a new mod folder must stay quiet before it is swept"
    )
    poll_interval: float = Field(
        default=1.0,
        description="Seconds between checks for settled mod folders"
    )


class SchedulingConfig(BaseModel):
    """Periodic sweep scheduling."""

    periodic_sweep: Optional[str] = Field(
        default=None,
        description="Cron expression for a periodic full sweep (None disables it)"
    )

    @validator("periodic_sweep")
    def validate_cron(cls, v):
        """Cron expressions have five fields."""
        if v is not None and len(v.split()) != 5:
            raise ValueError(f"Invalid cron expression: {v}")
        return v


class Config(BaseModel):
    """
    Root configuration model for the save installer.

    Loaded from config.yaml and overridden by environment variables. Passed
    explicitly to the orchestrator so sweeps never read ambient flags.
    """

    app: AppConfig = Field(default_factory=AppConfig)
    relocation: RelocationConfig = Field(default_factory=RelocationConfig)
    diagnostics: DiagnosticsConfig = Field(default_factory=DiagnosticsConfig)
    notifications: NotificationConfig = Field(default_factory=NotificationConfig)
    sweep: SweepConfig = Field(default_factory=SweepConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    watch: WatchConfig = Field(default_factory=WatchConfig)
    scheduling: SchedulingConfig = Field(default_factory=SchedulingConfig)

    class Config:
        """Pydantic configuration."""
        use_enum_values = True
        validate_assignment = True
