"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

OutputFormat = Literal["terminal", "json"]

OUTPUT_FORMATS = ("terminal", "json")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ApplyConfig:
    strict_context: bool = False  # validate context lines like deletions
    trim_whitespace: bool = True  # compare lines with surrounding whitespace stripped


@dataclass
class OutputConfig:
    format: OutputFormat = "terminal"
    show_summary: bool = True
    show_edits: bool = True


@dataclass
class LoggingConfig:
    level: str = "WARNING"


@dataclass
class PatchwiseConfig:
    version: str = "1.0"
    apply: ApplyConfig = field(default_factory=ApplyConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
