"""
Runtime Configuration

Tree construction settings: odd-level policy and hash algorithm.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass
from typing import Any

from dotenv import load_dotenv

from binmerkle.crypto.hashing import DEFAULT_HASHER, Hasher, get_hasher
from binmerkle.merkle.merkle_tree import OddLevelPolicy
from binmerkle.schemas.errors import ConfigurationException

load_dotenv()


ENV_PREFIX = "BINMERKLE_"


def _parse_policy(value: Any) -> OddLevelPolicy:
    if isinstance(value, OddLevelPolicy):
        return value
    try:
        if not isinstance(value, str):
            raise ValueError(value)
        return OddLevelPolicy(value.lower())
    except ValueError as e:
        raise ConfigurationException(
            f"Invalid odd_level_policy '{value}', expected one of "
            f"{[p.value for p in OddLevelPolicy]}",
            key="odd_level_policy",
        ) from e


@dataclass
class TreeConfig:
    """
    Configuration for tree construction.

    Can be loaded from:
    - Environment variables (and a .env file)
    - A dictionary (e.g. the "tree" section of a CLI config file)
    - Programmatic construction
    """
    odd_level_policy: OddLevelPolicy = OddLevelPolicy.STRICT
    hash_algorithm: str = DEFAULT_HASHER.name

    def __post_init__(self) -> None:
        self.odd_level_policy = _parse_policy(self.odd_level_policy)
        # Fail at load time rather than at first construct()
        self.hasher()

    def hasher(self) -> Hasher:
        """Hasher for the configured algorithm."""
        return get_hasher(self.hash_algorithm)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Read configuration overrides from environment variables.

        Supported variables:
        - BINMERKLE_ODD_LEVEL_POLICY: strict, promote or duplicate
        - BINMERKLE_HASH_ALGORITHM: hash algorithm name (sha256)
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}ODD_LEVEL_POLICY"):
            overrides["odd_level_policy"] = os.getenv(f"{ENV_PREFIX}ODD_LEVEL_POLICY")
        if os.getenv(f"{ENV_PREFIX}HASH_ALGORITHM"):
            overrides["hash_algorithm"] = os.getenv(f"{ENV_PREFIX}HASH_ALGORITHM")

        return overrides

    @classmethod
    def from_env(cls) -> "TreeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TreeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        unknown = set(data) - {"odd_level_policy", "hash_algorithm"}
        if unknown:
            raise ConfigurationException(
                f"Unknown tree configuration keys: {sorted(unknown)}",
                details={"keys": sorted(unknown)},
            )
        return cls(
            odd_level_policy=data.get("odd_level_policy", OddLevelPolicy.STRICT),
            hash_algorithm=data.get("hash_algorithm", DEFAULT_HASHER.name),
        )

    def with_env_overrides(self) -> "TreeConfig":
        """Return a new config with environment variable overrides applied."""
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)
        if "odd_level_policy" in overrides:
            new_config.odd_level_policy = _parse_policy(overrides["odd_level_policy"])
        if "hash_algorithm" in overrides:
            new_config.hash_algorithm = overrides["hash_algorithm"]
            new_config.hasher()
        return new_config

    def to_dict(self) -> dict[str, Any]:
        return {
            "odd_level_policy": self.odd_level_policy.value,
            "hash_algorithm": self.hash_algorithm,
        }
