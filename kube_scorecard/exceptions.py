"""Custom exception classes for kube-scorecard operations."""


class KubeScorecardError(Exception):
    """Base exception for kube-scorecard operations."""

    pass


class ConfigurationError(KubeScorecardError):
    """Raised when configuration is invalid. Aborts a run before any evaluation."""

    pass


class DuplicateCheckError(ConfigurationError):
    """Raised when a check identifier is registered twice."""

    def __init__(self, check_id: str):
        super().__init__(f"A check with the id '{check_id}' is already registered")
        self.check_id = check_id


class InvalidVersionRangeError(ConfigurationError):
    """Raised when the minimum of a version range is above its maximum."""

    pass


class ManifestParseError(KubeScorecardError):
    """Raised when a manifest source can not be decoded into resource objects."""

    def __init__(self, source: str, line: int | None, reason: str):
        location = f"{source}:{line}" if line is not None else source
        super().__init__(f"Failed to parse '{location}': {reason}")
        self.source = source
        self.line = line


class UnresolvedReferenceError(KubeScorecardError):
    """Raised by a relation resolver when a referenced object is not part of the input.

    The evaluator converts it into a critical test score, so it never ends a run.
    """

    def __init__(self, path: str, summary: str, description: str):
        super().__init__(summary)
        self.path = path
        self.summary = summary
        self.description = description
