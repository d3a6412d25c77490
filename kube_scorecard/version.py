import re
from dataclasses import dataclass
from typing import Optional

from .exceptions import ConfigurationError, InvalidVersionRangeError

_VERSION_PATTERN = re.compile(r"^v?(?P<major>\d+)\.(?P<minor>\d+)(\.\d+)?$")


@dataclass(frozen=True, order=True)
class KubernetesVersion:
    major: int
    minor: int

    @classmethod
    def parse(cls, value: str) -> "KubernetesVersion":
        """Parse a version like "v1.18", "1.18" or "1.18.3". The patch level is ignored.

        :param value: the version string
        :return: the parsed version
        :raises ConfigurationError: if the string is not a valid version
        """
        match = _VERSION_PATTERN.match(value.strip())
        if match is None:
            raise ConfigurationError(f"Invalid Kubernetes version: '{value}'. Expected a format like 'v1.18'")
        return cls(int(match.group("major")), int(match.group("minor")))

    def __str__(self) -> str:
        return f"v{self.major}.{self.minor}"


@dataclass(frozen=True)
class VersionRange:
    """Inclusive range of supported Kubernetes versions. An unset bound matches everything on that side."""

    min_version: Optional[KubernetesVersion] = None
    max_version: Optional[KubernetesVersion] = None

    def __post_init__(self):
        if self.min_version is not None and self.max_version is not None and self.min_version > self.max_version:
            raise InvalidVersionRangeError(
                f"Invalid version range: minimum {self.min_version} is above maximum {self.max_version}"
            )

    @property
    def is_unbounded(self) -> bool:
        return self.min_version is None and self.max_version is None

    def contains(self, version: KubernetesVersion) -> bool:
        if self.min_version is not None and version < self.min_version:
            return False
        if self.max_version is not None and version > self.max_version:
            return False
        return True

    def __str__(self) -> str:
        if self.is_unbounded:
            return "*"
        lower = f">={self.min_version}" if self.min_version is not None else ""
        upper = f"<={self.max_version}" if self.max_version is not None else ""
        return ",".join(part for part in (lower, upper) if part)
