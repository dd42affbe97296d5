"""Configuration loading and settings."""

from src.config.cache_rules import (
    CacheRuleSource,
    JsonCacheRuleSource,
    StaticCacheRuleSource,
)
from src.config.settings import Settings, get_settings

__all__ = [
    "CacheRuleSource",
    "JsonCacheRuleSource",
    "Settings",
    "StaticCacheRuleSource",
    "get_settings",
]
