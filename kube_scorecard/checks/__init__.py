from ..domain import POD_TEMPLATE_KINDS
from ..version import VersionRange
from .findings import Finding
from .registry import CheckDefinition, CheckRegistry, Relation
from .seccomp import container_seccomp_profile
from .security import (
    container_security_context,
    container_security_context_privileged,
    container_security_context_read_only_root_filesystem,
    container_security_context_user_group_id,
)
from .selection import CheckSelection
from .stable_version import MIN_SUPPORTED_VERSION, STABLE_VERSION_KINDS, stable_version
from .statefulset import resolve_service, statefulset_has_service_name

__all__ = [
    "CheckDefinition",
    "CheckRegistry",
    "CheckSelection",
    "Finding",
    "Relation",
    "build_registry",
]


def build_registry() -> CheckRegistry:
    """Create the registry with the complete catalog of checks.
    The order of registration is the order of the test scores in every scorecard.

    :return: the populated registry
    """
    registry = CheckRegistry()

    registry.register(
        CheckDefinition(
            check_id="container-security-context",
            name="Container Security Context",
            target_kinds=POD_TEMPLATE_KINDS,
            func=container_security_context,
            optional=True,
            comment="Makes sure that all pods have good securityContexts configured",
        )
    )
    registry.register(
        CheckDefinition(
            check_id="container-security-context-user-group-id",
            name="Container Security Context User Group ID",
            target_kinds=POD_TEMPLATE_KINDS,
            func=container_security_context_user_group_id,
            comment="Makes sure that all pods have a security context with a high user and group ID",
        )
    )
    registry.register(
        CheckDefinition(
            check_id="container-security-context-privileged",
            name="Container Security Context Privileged",
            target_kinds=POD_TEMPLATE_KINDS,
            func=container_security_context_privileged,
            comment="Makes sure that no containers run in privileged mode",
        )
    )
    registry.register(
        CheckDefinition(
            check_id="container-security-context-readonlyrootfilesystem",
            name="Container Security Context ReadOnlyRootFilesystem",
            target_kinds=POD_TEMPLATE_KINDS,
            func=container_security_context_read_only_root_filesystem,
            comment="Makes sure that all containers run with a read-only root filesystem",
        )
    )
    registry.register(
        CheckDefinition(
            check_id="container-seccomp-profile",
            name="Container Seccomp Profile",
            target_kinds=POD_TEMPLATE_KINDS,
            func=container_seccomp_profile,
            optional=True,
            comment="Makes sure that all pods have a seccomp policy configured",
        )
    )
    registry.register(
        CheckDefinition(
            check_id="stable-version",
            name="Stable version",
            target_kinds=STABLE_VERSION_KINDS,
            func=stable_version,
            version_range=VersionRange(min_version=MIN_SUPPORTED_VERSION),
            comment="Checks if the object is using a deprecated apiVersion",
        )
    )
    registry.register(
        CheckDefinition(
            check_id="statefulset-has-servicename",
            name="StatefulSet has ServiceName",
            target_kinds=frozenset(["StatefulSet"]),
            func=statefulset_has_service_name,
            relations=(Relation("service", resolve_service),),
            comment="Makes sure that StatefulSets have an existing headless serviceName",
        )
    )
    return registry
