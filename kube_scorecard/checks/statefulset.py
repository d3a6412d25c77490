from ..domain import ObjectIndex, ResourceObject
from ..exceptions import UnresolvedReferenceError
from ..scorecard import Grade
from .findings import Finding

INVALID_SERVICE_NAME = "StatefulSet does not have a valid serviceName"
SERVICE_NAME_DESCRIPTION = (
    "StatefulSets currently require a Headless Service to be responsible for the network identity of the Pods. "
    "You are responsible for creating this Service."
)


def resolve_service(obj: ResourceObject, index: ObjectIndex) -> ResourceObject:
    """Find the Service the StatefulSet references by `spec.serviceName`.

    :raises UnresolvedReferenceError: if no name is set or no such Service is part of the input
    """
    service_name = obj.spec.get("serviceName")
    if not service_name:
        raise UnresolvedReferenceError("spec.serviceName", INVALID_SERVICE_NAME, SERVICE_NAME_DESCRIPTION)

    service = index.find("Service", obj.namespace, service_name)
    if service is None:
        raise UnresolvedReferenceError(
            "spec.serviceName",
            INVALID_SERVICE_NAME,
            f"The Service '{service_name}' does not exist in namespace '{obj.effective_namespace}'. "
            + SERVICE_NAME_DESCRIPTION,
        )
    return service


def _selector_matches(selector: dict, labels: dict) -> bool:
    return bool(selector) and all(labels.get(k) == v for k, v in selector.items())


def statefulset_has_service_name(obj: ResourceObject, service: ResourceObject) -> list[Finding]:
    if service.spec.get("clusterIP") != "None":
        return [
            Finding(
                Grade.Critical,
                "spec.serviceName",
                INVALID_SERVICE_NAME,
                f"The Service '{service.name}' is not headless. Set spec.clusterIP to None. "
                + SERVICE_NAME_DESCRIPTION,
            )
        ]

    pod = obj.pod_template
    labels = dict(pod.labels) if pod is not None else {}
    if not _selector_matches(service.spec.get("selector") or {}, labels):
        return [
            Finding(
                Grade.Critical,
                "spec.serviceName",
                INVALID_SERVICE_NAME,
                f"The selector of the Service '{service.name}' does not match the labels of the pod template. "
                + SERVICE_NAME_DESCRIPTION,
            )
        ]
    return []
