from dataclasses import dataclass, field
from typing import Optional

from ..version import KubernetesVersion
from .registry import CheckDefinition, CheckRegistry


@dataclass(frozen=True)
class CheckSelection:
    """Decides which checks are active in a run.

    Mandatory checks always run, optional ones only when enabled by id.
    A configured Kubernetes version restricts the checks to those supporting it,
    without a version the version ranges are ignored.
    """

    enabled_optional: frozenset[str] = field(default_factory=frozenset)
    kubernetes_version: Optional[KubernetesVersion] = None

    def is_active(self, definition: CheckDefinition) -> bool:
        if definition.optional and definition.check_id not in self.enabled_optional:
            return False
        if self.kubernetes_version is None:
            return True
        return definition.version_range.contains(self.kubernetes_version)

    def active_checks(self, registry: CheckRegistry) -> list[CheckDefinition]:
        return [c for c in registry.all() if self.is_active(c)]

    def unknown_optional(self, registry: CheckRegistry) -> list[str]:
        """The enabled ids which do not belong to any registered check, sorted for a stable output."""
        return sorted(i for i in self.enabled_optional if i not in registry)
