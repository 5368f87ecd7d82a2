"""Configuration module for the MongoDB connection layer."""

from mongoconn.config.settings import AppSettings, Settings, get_settings

__all__ = ["AppSettings", "Settings", "get_settings"]
