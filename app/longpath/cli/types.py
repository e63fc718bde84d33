"""Shared types for CLI commands."""

from enum import Enum


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"
    CSV = "csv"
