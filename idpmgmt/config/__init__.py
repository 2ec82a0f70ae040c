"""Configuration module for the Management API client."""
from .settings import ManagementSettings, load_settings, configure_logging

__all__ = ["ManagementSettings", "load_settings", "configure_logging"]
