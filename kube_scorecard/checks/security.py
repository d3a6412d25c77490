"""
Container security context checks.

Fields which are not set on the container are inherited from the security context of the pod.
All checks share the same resolution and thresholds and only differ in the rules they report.
"""
from typing import Any, Optional

from ..domain import Container, PodTemplate, ResourceObject, SecurityContext
from ..scorecard import Grade
from .findings import Finding

# IDs up to this value are likely to collide with users on the host
MIN_SAFE_ID = 10000

INHERITED_FIELDS = (
    "read_only_root_filesystem",
    "run_as_user",
    "run_as_group",
    "run_as_non_root",
    "privileged",
)

NO_SECURITY_CONTEXT = (
    "Container has no configured security context",
    "Set securityContext to run the container in a more secure context.",
)
WRITABLE_ROOT_FILESYSTEM = (
    "The pod has a container with a writable root filesystem",
    "Set securityContext.readOnlyRootFilesystem to true",
)
LOW_USER_ID = (
    "The container is running with a low user ID",
    "A userid above 10 000 is recommended to avoid conflicts with the host. "
    "Set securityContext.runAsUser to a value > 10000",
)
LOW_GROUP_ID = (
    "The container running with a low group ID",
    "A groupid above 10 000 is recommended to avoid conflicts with the host. "
    "Set securityContext.runAsGroup to a value > 10000",
)
PRIVILEGED = (
    "The container is privileged",
    "Set securityContext.privileged to false. Privileged containers can access all devices on the host, "
    "and grants almost the same access as non-containerized processes on the host.",
)


def resolve_field(container_ctx: SecurityContext | None, pod_ctx: SecurityContext | None, name: str) -> Any:
    """Get the effective value of a security context field.

    :param container_ctx: the security context of the container
    :param pod_ctx: the security context of the pod
    :param name: the name of the field
    :return: the container value if it's set, else the pod value if it's set, else None
    """
    for ctx in (container_ctx, pod_ctx):
        if ctx is not None:
            value = getattr(ctx, name)
            if value is not None:
                return value
    return None


def effective_security_context(container: Container, pod: PodTemplate | None) -> Optional[SecurityContext]:
    """The security context of the container after inheriting the unset fields from the pod.

    :return: the merged context or None, if the container has no security context at all
    """
    if container.security_context is None:
        return None
    pod_ctx = pod.security_context if pod is not None else None
    values = {name: resolve_field(container.security_context, pod_ctx, name) for name in INHERITED_FIELDS}
    return SecurityContext(seccomp_profile=container.security_context.seccomp_profile, **values)


def _critical(container: Container, message: tuple[str, str]) -> Finding:
    summary, description = message
    return Finding(Grade.Critical, container.name, summary, description)


def has_writable_root_filesystem(ctx: SecurityContext) -> bool:
    return ctx.read_only_root_filesystem is not True


def has_low_user_id(ctx: SecurityContext) -> bool:
    return ctx.run_as_user is None or ctx.run_as_user <= MIN_SAFE_ID


def has_low_group_id(ctx: SecurityContext) -> bool:
    return ctx.run_as_group is None or ctx.run_as_group <= MIN_SAFE_ID


def is_privileged(ctx: SecurityContext) -> bool:
    return ctx.privileged is True


def _evaluate(
    obj: ResourceObject,
    *,
    root_filesystem: bool = False,
    user_group_id: bool = False,
    privileged: bool = False,
    require_context: bool = True,
) -> list[Finding]:
    pod = obj.pod_template
    if pod is None:
        return []

    findings = []
    for container in pod.all_containers:
        ctx = effective_security_context(container, pod)
        if ctx is None:
            if require_context:
                findings.append(_critical(container, NO_SECURITY_CONTEXT))
            continue

        if root_filesystem and has_writable_root_filesystem(ctx):
            findings.append(_critical(container, WRITABLE_ROOT_FILESYSTEM))
        if user_group_id and has_low_user_id(ctx):
            findings.append(_critical(container, LOW_USER_ID))
        if user_group_id and has_low_group_id(ctx):
            findings.append(_critical(container, LOW_GROUP_ID))
        if privileged and is_privileged(ctx):
            findings.append(_critical(container, PRIVILEGED))
    return findings


def container_security_context(obj: ResourceObject) -> list[Finding]:
    return _evaluate(obj, root_filesystem=True, user_group_id=True, privileged=True)


def container_security_context_user_group_id(obj: ResourceObject) -> list[Finding]:
    return _evaluate(obj, user_group_id=True)


def container_security_context_privileged(obj: ResourceObject) -> list[Finding]:
    # privileged defaults to false, so a missing context is fine here
    return _evaluate(obj, privileged=True, require_context=False)


def container_security_context_read_only_root_filesystem(obj: ResourceObject) -> list[Finding]:
    return _evaluate(obj, root_filesystem=True)
