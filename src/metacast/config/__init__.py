"""Configuration management for Metacast."""

from metacast.config.manager import ConfigManager
from metacast.config.schema import FeedSettings, GlobalConfig, IngestConfig, ProbeConfig

__all__ = ["ConfigManager", "GlobalConfig", "IngestConfig", "FeedSettings", "ProbeConfig"]
