"""Configuration module for the Apikey synchronizer."""
from .settings import SyncConfig, load_settings

__all__ = ["SyncConfig", "load_settings"]
