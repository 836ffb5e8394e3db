"""
Configuration for equivalence checking.

Settings can be built in code, from a dict, or from a YAML file:

    backend: z3
    timeout_ms: 5000
    max_truth_table_inputs: 16
    isomorphism: commutative
"""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

import yaml

from fprog.isomorphism import IsomorphismPolicy

logger = logging.getLogger(__name__)

BACKENDS = ("z3", "truth-table")


class ConfigError(ValueError):
    """Raised when configuration values are invalid."""
    pass


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class EquivalenceConfig:
    """
    Settings for the decision procedure and isomorphism policy.

    Properties:
        backend:
            "z3" (default) or "truth-table"
        timeout_ms:
            Passed to z3 unchanged; None leaves z3's default (no timeout)
        max_truth_table_inputs:
            Largest input count the truth-table backend will enumerate
        isomorphism:
            Policy used for statement-level isomorphism
    """

    backend: str = "z3"
    timeout_ms: Optional[int] = None
    max_truth_table_inputs: int = 16
    isomorphism: IsomorphismPolicy = IsomorphismPolicy.COMMUTATIVE

    def __post_init__(self):
        if self.backend not in BACKENDS:
            raise ConfigError(f"Unknown backend {self.backend!r}; expected one of {', '.join(BACKENDS)}")
        if self.timeout_ms is not None and (not _is_int(self.timeout_ms) or self.timeout_ms <= 0):
            raise ConfigError(f"timeout_ms must be a positive integer, got {self.timeout_ms!r}")
        if not _is_int(self.max_truth_table_inputs) or self.max_truth_table_inputs < 0:
            raise ConfigError(
                f"max_truth_table_inputs must be a non-negative integer, got {self.max_truth_table_inputs!r}"
            )
        if not isinstance(self.isomorphism, IsomorphismPolicy):
            raise ConfigError(f"isomorphism must be an IsomorphismPolicy, got {self.isomorphism!r}")


def config_from_dict(d: Optional[Dict[str, Any]]) -> EquivalenceConfig:
    if d is None:
        return EquivalenceConfig()
    if not isinstance(d, dict):
        raise ConfigError(f"Configuration must be a mapping, got {type(d).__name__}")

    known = {f.name for f in fields(EquivalenceConfig)}
    unknown = sorted(set(d) - known)
    if unknown:
        warnings.warn(f"Ignoring unknown configuration keys: {', '.join(unknown)}", UserWarning)

    values = {k: v for k, v in d.items() if k in known}
    if "isomorphism" in values:
        try:
            values["isomorphism"] = IsomorphismPolicy(values["isomorphism"])
        except ValueError as e:
            raise ConfigError(f"Unknown isomorphism policy: {values['isomorphism']!r}") from e
    return EquivalenceConfig(**values)


def config_to_dict(config: EquivalenceConfig) -> Dict[str, Any]:
    return {
        "backend": config.backend,
        "timeout_ms": config.timeout_ms,
        "max_truth_table_inputs": config.max_truth_table_inputs,
        "isomorphism": config.isomorphism.value,
    }


def load_config(path: str) -> EquivalenceConfig:
    """Read an EquivalenceConfig from a YAML file."""
    with open(path) as fh:
        try:
            data = yaml.safe_load(fh)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    logger.debug("Loaded configuration from %s", path)
    return config_from_dict(data)
