from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional

DEFAULT_NAMESPACE = "default"

# kinds whose pod template is located at `spec.template`
TEMPLATE_CONTROLLER_KINDS = frozenset(
    ["Deployment", "StatefulSet", "DaemonSet", "ReplicaSet", "ReplicationController", "Job"]
)
POD_TEMPLATE_KINDS = frozenset(["Pod", "CronJob", *TEMPLATE_CONTROLLER_KINDS])


@dataclass(frozen=True)
class SourceLocation:
    file_name: str
    line: int = 1

    def __str__(self) -> str:
        return f"{self.file_name}:{self.line}"


@dataclass(frozen=True)
class SecurityContext:
    """The security relevant settings of a container or a pod.
    A field which is not present in the manifest stays `None`, it is never defaulted.
    """

    read_only_root_filesystem: Optional[bool] = None
    run_as_user: Optional[int] = None
    run_as_group: Optional[int] = None
    run_as_non_root: Optional[bool] = None
    privileged: Optional[bool] = None
    seccomp_profile: Optional[Mapping[str, Any]] = None

    @classmethod
    def from_manifest(cls, ctx: Mapping[str, Any] | None) -> Optional["SecurityContext"]:
        if ctx is None:
            return None
        return cls(
            read_only_root_filesystem=ctx.get("readOnlyRootFilesystem"),
            run_as_user=ctx.get("runAsUser"),
            run_as_group=ctx.get("runAsGroup"),
            run_as_non_root=ctx.get("runAsNonRoot"),
            privileged=ctx.get("privileged"),
            seccomp_profile=ctx.get("seccompProfile"),
        )


# both levels share the same shape, only the available keys differ in Kubernetes
PodSecurityContext = SecurityContext


@dataclass(frozen=True)
class Container:
    name: str
    image: Optional[str] = None
    security_context: Optional[SecurityContext] = None

    @classmethod
    def from_manifest(cls, container: Mapping[str, Any]) -> "Container":
        return cls(
            name=container.get("name", ""),
            image=container.get("image"),
            security_context=SecurityContext.from_manifest(container.get("securityContext")),
        )


@dataclass(frozen=True)
class PodTemplate:
    labels: Mapping[str, str] = field(default_factory=dict)
    annotations: Mapping[str, str] = field(default_factory=dict)
    security_context: Optional[PodSecurityContext] = None
    containers: tuple[Container, ...] = ()
    init_containers: tuple[Container, ...] = ()

    @property
    def all_containers(self) -> tuple[Container, ...]:
        return self.init_containers + self.containers

    @classmethod
    def from_manifest(cls, template: Mapping[str, Any]) -> "PodTemplate":
        metadata = template.get("metadata") or {}
        spec = template.get("spec") or {}
        return cls(
            labels=metadata.get("labels") or {},
            annotations=metadata.get("annotations") or {},
            security_context=SecurityContext.from_manifest(spec.get("securityContext")),
            containers=tuple(Container.from_manifest(c) for c in spec.get("containers") or []),
            init_containers=tuple(Container.from_manifest(c) for c in spec.get("initContainers") or []),
        )


@dataclass(frozen=True)
class ResourceObject:
    """A single parsed manifest as it is handed to the checks.

    The checks only read from the object. The capability accessors (e.g. `pod_template`)
    hide where a kind keeps the relevant information, so checks don't special-case kinds.
    """

    kind: str
    api_version: str
    name: str
    namespace: Optional[str] = None  # None means no namespace was declared
    manifest: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)
    location: Optional[SourceLocation] = field(default=None, compare=False)

    @classmethod
    def from_manifest(cls, manifest: Mapping[str, Any], location: SourceLocation | None = None) -> "ResourceObject":
        metadata = manifest.get("metadata") or {}
        return cls(
            kind=manifest.get("kind", ""),
            api_version=manifest.get("apiVersion", ""),
            name=metadata.get("name", ""),
            namespace=metadata.get("namespace"),
            manifest=manifest,
            location=location,
        )

    @property
    def identity(self) -> tuple[str, Optional[str], str]:
        return self.kind, self.namespace, self.name

    @property
    def effective_namespace(self) -> str:
        return self.namespace or DEFAULT_NAMESPACE

    @property
    def spec(self) -> Mapping[str, Any]:
        return self.manifest.get("spec") or {}

    @property
    def pod_template(self) -> Optional[PodTemplate]:
        """The pod (template) of the object or None, if the kind does not manage pods."""
        if self.kind == "Pod":
            return PodTemplate.from_manifest(self.manifest)
        if self.kind in TEMPLATE_CONTROLLER_KINDS:
            return PodTemplate.from_manifest(self.spec.get("template") or {})
        if self.kind == "CronJob":
            job_spec = (self.spec.get("jobTemplate") or {}).get("spec") or {}
            return PodTemplate.from_manifest(job_spec.get("template") or {})
        return None

    def __str__(self) -> str:
        ns = f"{self.namespace}/" if self.namespace else ""
        return f"{self.api_version}/{self.kind} {ns}{self.name}"


class ObjectIndex:
    """Read-only lookup of objects by their identity across the whole input."""

    def __init__(self, objects: Iterable[ResourceObject]):
        self._objects: dict[tuple[str, str, str], ResourceObject] = {}
        for obj in objects:
            # on duplicate identities the first object in input order wins
            self._objects.setdefault((obj.kind, obj.effective_namespace, obj.name), obj)

    def find(self, kind: str, namespace: str | None, name: str) -> Optional[ResourceObject]:
        return self._objects.get((kind, namespace or DEFAULT_NAMESPACE, name))

    def __len__(self):
        return len(self._objects)
