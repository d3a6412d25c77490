from dataclasses import dataclass, field
from typing import Callable, Iterator, Optional

from loguru import logger

from ..domain import ObjectIndex, ResourceObject
from ..exceptions import DuplicateCheckError
from ..version import VersionRange
from .findings import Finding

CheckFunc = Callable[..., list[Finding]]


@dataclass(frozen=True)
class Relation:
    """A reference from the checked object to another object of the input.

    `resolve` returns the related object or raises an `UnresolvedReferenceError`.
    """

    name: str
    resolve: Callable[[ResourceObject, ObjectIndex], ResourceObject]


@dataclass(frozen=True)
class CheckDefinition:
    check_id: str
    name: str
    target_kinds: frozenset[str]
    func: CheckFunc = field(repr=False)
    optional: bool = False
    version_range: VersionRange = field(default_factory=VersionRange)
    comment: str = ""
    relations: tuple[Relation, ...] = ()

    def applies_to(self, kind: str) -> bool:
        return kind in self.target_kinds


class CheckRegistry:
    """Append-only collection of all known checks in registration order."""

    def __init__(self):
        self._checks: dict[str, CheckDefinition] = {}

    def register(self, definition: CheckDefinition) -> CheckDefinition:
        """Add the check to the registry.

        :param definition: the check to add
        :return: the registered check
        :raises DuplicateCheckError: if a check with the same id is already registered
        """
        if definition.check_id in self._checks:
            raise DuplicateCheckError(definition.check_id)
        self._checks[definition.check_id] = definition
        logger.debug(f"Registered check '{definition.check_id}'")
        return definition

    def get(self, check_id: str) -> Optional[CheckDefinition]:
        return self._checks.get(check_id, None)

    def all(self) -> list[CheckDefinition]:
        return list(self._checks.values())

    def ids(self) -> list[str]:
        return list(self._checks.keys())

    def __contains__(self, check_id: str) -> bool:
        return check_id in self._checks

    def __iter__(self) -> Iterator[CheckDefinition]:
        return iter(self._checks.values())

    def __len__(self):
        return len(self._checks)
