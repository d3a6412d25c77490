"""Configuration management for kube-scorecard."""

import os
from dataclasses import dataclass, field
from typing import Optional

from .checks.selection import CheckSelection
from .constants import MAX_WORKERS, VALID_LOG_LEVELS
from .exceptions import ConfigurationError
from .version import KubernetesVersion


def _split_ids(value: str) -> frozenset[str]:
    return frozenset(v.strip() for v in value.split(",") if v.strip())


@dataclass
class RunConfig:
    """The configuration of a single run."""

    kubernetes_version: Optional[KubernetesVersion] = None
    enabled_optional_checks: frozenset[str] = field(default_factory=frozenset)
    max_workers: int = 1
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "RunConfig":
        """Load configuration from environment variables."""
        version = os.getenv("KUBE_SCORECARD_KUBERNETES_VERSION")
        workers = os.getenv("KUBE_SCORECARD_WORKERS", "1")
        try:
            max_workers = int(workers)
        except ValueError:
            raise ConfigurationError(f"Invalid number of workers: '{workers}'") from None

        return cls(
            kubernetes_version=KubernetesVersion.parse(version) if version else None,
            enabled_optional_checks=_split_ids(os.getenv("KUBE_SCORECARD_ENABLE_OPTIONAL_TESTS", "")),
            max_workers=max_workers,
            log_level=os.getenv("KUBE_SCORECARD_LOG_LEVEL", "WARNING"),
        )

    def validate(self) -> None:
        """Validate the configuration.

        :raises ConfigurationError: if any setting is invalid
        """
        if self.log_level.upper() not in VALID_LOG_LEVELS:
            raise ConfigurationError(f"Invalid log level: {self.log_level}. Must be one of {VALID_LOG_LEVELS}")

        if not (1 <= self.max_workers <= MAX_WORKERS):
            raise ConfigurationError(
                f"Invalid number of workers: {self.max_workers}. Must be between 1 and {MAX_WORKERS}"
            )

    def selection(self) -> CheckSelection:
        return CheckSelection(
            enabled_optional=frozenset(self.enabled_optional_checks),
            kubernetes_version=self.kubernetes_version,
        )
