from ..domain import ResourceObject
from ..scorecard import Grade
from .findings import Finding

SECCOMP_ANNOTATION = "seccomp.security.alpha.kubernetes.io/defaultProfileName"


def container_seccomp_profile(obj: ResourceObject) -> list[Finding]:
    """Warn if the pod does not run its containers with a seccomp profile.
    Either the (deprecated) annotation or the `seccompProfile` of the security contexts is accepted.
    """
    pod = obj.pod_template
    if pod is None:
        return []

    if SECCOMP_ANNOTATION in pod.annotations:
        return []
    if pod.security_context is not None and pod.security_context.seccomp_profile:
        return []
    containers = pod.all_containers
    if containers and all(c.security_context is not None and c.security_context.seccomp_profile for c in containers):
        return []

    return [
        Finding(
            Grade.Warning,
            "metadata.annotations",
            "The pod has not configured Seccomp for its containers",
            "Running containers with Seccomp is recommended to reduce the kernel attack surface",
        )
    ]
