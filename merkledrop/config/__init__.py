"""
Runtime Configuration Module

Provides configuration loading and management for tree builds and campaigns.
"""

from .runtime import (
    DEFAULT_CAMPAIGN_DURATION_S,
    BuildConfig,
    CampaignConfig,
    RuntimeConfig,
    get_default_config,
    load_config,
    set_default_config,
)

__all__ = [
    "DEFAULT_CAMPAIGN_DURATION_S",
    "BuildConfig",
    "CampaignConfig",
    "RuntimeConfig",
    "get_default_config",
    "load_config",
    "set_default_config",
]
