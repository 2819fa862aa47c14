"""
Core services shared by the layout engine: configuration, signals, logging.
"""
from .config import ConfigManager, DockLayoutConfig, DockSettings, LoggingSettings
from .events import Signal
from .logging import setup_logging, setup_logging_from


__all__ = [
    "ConfigManager",
    "DockLayoutConfig",
    "DockSettings",
    "LoggingSettings",
    "Signal",
    "setup_logging",
    "setup_logging_from",
]
