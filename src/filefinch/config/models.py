"""Configuration models describing FileFinch settings."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class FileFinchBaseModel(BaseModel):
    """Shared configuration for FileFinch Pydantic models."""

    model_config = ConfigDict(extra="forbid")


class DetectionOptions(FileFinchBaseModel):
    """Options controlling how buffers are classified.

    Attributes:
        use_extension_fallback: Whether filename extensions are consulted
            when content detection is inconclusive.
    """

    use_extension_fallback: bool = True


class ProcessingOptions(FileFinchBaseModel):
    """Processing options governing file discovery and reads.

    Attributes:
        recurse_directories: Whether to recurse into subdirectories.
        process_hidden_files: Whether hidden files should be included.
        follow_symlinks: Whether to traverse symbolic links.
        max_file_size_mb: Size above which files are only sampled.
        sample_size_mb: Leading bytes read from oversized files; 0 reads all.
    """

    recurse_directories: bool = False
    process_hidden_files: bool = False
    follow_symlinks: bool = False
    max_file_size_mb: int = Field(default=100, ge=0)
    sample_size_mb: int = Field(default=10, ge=0)


class LoggingSettings(FileFinchBaseModel):
    """Runtime logging configuration.

    Attributes:
        level: Logging verbosity level.
    """

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"


class CLIOptions(FileFinchBaseModel):
    """CLI behavior defaults and presentation preferences.

    Attributes:
        quiet_default: Whether commands suppress non-error output by default.
        summary_default: Whether commands only print summary lines by default.
    """

    quiet_default: bool = False
    summary_default: bool = False


class FileFinchConfig(FileFinchBaseModel):
    """Top-level configuration struct for FileFinch.

    Attributes:
        detection: Classification settings.
        processing: Discovery and read settings.
        logging: Logging configuration.
        cli: CLI presentation defaults.
    """

    detection: DetectionOptions = Field(default_factory=DetectionOptions)
    processing: ProcessingOptions = Field(default_factory=ProcessingOptions)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    cli: CLIOptions = Field(default_factory=CLIOptions)


__all__ = [
    "FileFinchBaseModel",
    "DetectionOptions",
    "ProcessingOptions",
    "LoggingSettings",
    "CLIOptions",
    "FileFinchConfig",
]
