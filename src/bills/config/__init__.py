"""Configuration module."""
from .settings import AppSettings, get_settings
from .options import ReportOptions

__all__ = ["AppSettings", "get_settings", "ReportOptions"]
