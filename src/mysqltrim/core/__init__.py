"""Core module - configuration, logging, and shared models."""

from mysqltrim.core.config import Settings, get_settings
from mysqltrim.core.formatting import human_bytes
from mysqltrim.core.models import Result, ScanResult, TableStats

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Formatting
    "human_bytes",
    # Models
    "Result",
    "ScanResult",
    "TableStats",
]
