from ..domain import ResourceObject
from ..scorecard import Grade
from ..version import KubernetesVersion
from .findings import Finding

APPS_V1 = ("apps/v1", KubernetesVersion(1, 9))
NETWORKING_V1 = ("networking.k8s.io/v1", KubernetesVersion(1, 8))

# (apiVersion, kind) -> (replacement, available since)
DEPRECATED_APIS = {
    ("extensions/v1beta1", "Deployment"): APPS_V1,
    ("extensions/v1beta1", "DaemonSet"): APPS_V1,
    ("extensions/v1beta1", "ReplicaSet"): APPS_V1,
    ("apps/v1beta1", "Deployment"): APPS_V1,
    ("apps/v1beta1", "StatefulSet"): APPS_V1,
    ("apps/v1beta2", "Deployment"): APPS_V1,
    ("apps/v1beta2", "StatefulSet"): APPS_V1,
    ("apps/v1beta2", "DaemonSet"): APPS_V1,
    ("apps/v1beta2", "ReplicaSet"): APPS_V1,
    ("extensions/v1beta1", "NetworkPolicy"): NETWORKING_V1,
}

STABLE_VERSION_KINDS = frozenset(kind for _, kind in DEPRECATED_APIS)

# every replacement is available from this version onward
MIN_SUPPORTED_VERSION = max(since for _, since in DEPRECATED_APIS.values())


def stable_version(obj: ResourceObject) -> list[Finding]:
    replacement = DEPRECATED_APIS.get((obj.api_version, obj.kind))
    if replacement is None:
        return []

    new_version, since = replacement
    return [
        Finding(
            Grade.Warning,
            "apiVersion",
            f"{obj.api_version} {obj.kind} is deprecated",
            f"It's recommended to use {new_version} instead which has been available since Kubernetes {since}",
        )
    ]
