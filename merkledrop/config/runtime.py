"""
Runtime Configuration

Central configuration for tree building and campaign (claim ledger) setup.
"""

from __future__ import annotations

import copy
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from merkledrop.schemas.errors import ConfigException

load_dotenv()


ENV_PREFIX = "MERKLEDROP_"

# 30 days
DEFAULT_CAMPAIGN_DURATION_S = 30 * 24 * 60 * 60


@dataclass
class CampaignConfig:
    """Immutable parameters of one airdrop campaign."""
    root: Optional[str] = None
    start: Optional[float] = None  # epoch seconds; None means "now" at ledger construction
    duration_s: int = DEFAULT_CAMPAIGN_DURATION_S
    owner: Optional[str] = None
    token_address: Optional[str] = None
    credential_address: Optional[str] = None
    bind_leaf_to_claimant: bool = True


@dataclass
class BuildConfig:
    """Configuration for the offline tree builder."""
    allowlist_path: Optional[str] = None
    delimiter: str = ","
    max_workers: Optional[int] = None
    manifest_path: Optional[str] = None


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables (and a .env file)
    - YAML file
    - Programmatic construction
    """
    campaign: CampaignConfig = field(default_factory=CampaignConfig)
    build: BuildConfig = field(default_factory=BuildConfig)
    log_level: str = "INFO"
    log_file: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - MERKLEDROP_ROOT: Published Merkle root (0x-hex)
        - MERKLEDROP_START: Campaign start, epoch seconds
        - MERKLEDROP_DURATION_S: Campaign length in seconds
        - MERKLEDROP_OWNER / MERKLEDROP_TOKEN_ADDRESS / MERKLEDROP_CREDENTIAL_ADDRESS
        - MERKLEDROP_BIND_LEAF: Derive leaves from the claimant (true/false)
        - MERKLEDROP_ALLOWLIST: Allow-list CSV path
        - MERKLEDROP_DELIMITER: Allow-list delimiter
        - MERKLEDROP_MAX_WORKERS: Threads used for leaf hashing
        - MERKLEDROP_MANIFEST: Manifest output path
        - MERKLEDROP_LOG_LEVEL / MERKLEDROP_LOG_FILE
        """
        overrides: dict[str, Any] = {}

        def env(name: str) -> Optional[str]:
            value = os.getenv(f"{ENV_PREFIX}{name}")
            return value if value else None

        campaign_keys = {
            "ROOT": "root",
            "OWNER": "owner",
            "TOKEN_ADDRESS": "token_address",
            "CREDENTIAL_ADDRESS": "credential_address",
        }
        for var, key in campaign_keys.items():
            if env(var):
                overrides.setdefault("campaign", {})[key] = env(var)
        if env("START"):
            overrides.setdefault("campaign", {})["start"] = _parse_number(env("START"), "START", float)
        if env("DURATION_S"):
            overrides.setdefault("campaign", {})["duration_s"] = _parse_number(env("DURATION_S"), "DURATION_S", int)
        if env("BIND_LEAF"):
            overrides.setdefault("campaign", {})["bind_leaf_to_claimant"] = (
                env("BIND_LEAF").lower() == "true"
            )

        if env("ALLOWLIST"):
            overrides.setdefault("build", {})["allowlist_path"] = env("ALLOWLIST")
        if env("DELIMITER"):
            overrides.setdefault("build", {})["delimiter"] = env("DELIMITER")
        if env("MAX_WORKERS"):
            overrides.setdefault("build", {})["max_workers"] = _parse_number(env("MAX_WORKERS"), "MAX_WORKERS", int)
        if env("MANIFEST"):
            overrides.setdefault("build", {})["manifest_path"] = env("MANIFEST")

        if env("LOG_LEVEL"):
            overrides["log_level"] = env("LOG_LEVEL").upper()
        if env("LOG_FILE"):
            overrides["log_file"] = env("LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ConfigException(f"Config file must contain a mapping: {path}")
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        campaign_data = data.get("campaign") or {}
        build_data = data.get("build") or {}

        try:
            campaign = CampaignConfig(**campaign_data)
            build = BuildConfig(**build_data)
        except TypeError as e:
            raise ConfigException(f"Unknown configuration key: {e}") from e

        return cls(
            campaign=campaign,
            build=build,
            log_level=data.get("log_level", "INFO"),
            log_file=data.get("log_file"),
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)
        for key, value in overrides.get("campaign", {}).items():
            setattr(new_config.campaign, key, value)
        for key, value in overrides.get("build", {}).items():
            setattr(new_config.build, key, value)
        if "log_level" in overrides:
            new_config.log_level = overrides["log_level"]
        if "log_file" in overrides:
            new_config.log_file = overrides["log_file"]
        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "campaign": asdict(self.campaign),
            "build": asdict(self.build),
            "log_level": self.log_level,
            "log_file": self.log_file,
            "extra": self.extra,
        }


def _parse_number(raw: str, name: str, kind: type) -> Any:
    try:
        return kind(raw)
    except ValueError as e:
        raise ConfigException(f"{ENV_PREFIX}{name} must be a number, got {raw!r}") from e


def load_config(path: str | Path | None = None) -> RuntimeConfig:
    """YAML file (if given) overlaid with environment variables."""
    if path is None:
        return RuntimeConfig.from_env()
    return RuntimeConfig.from_yaml(path).with_env_overrides()


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: RuntimeConfig) -> None:
    """Set the default runtime configuration."""
    global _default_config
    _default_config = config
