from .checks import CheckDefinition, CheckRegistry, CheckSelection, build_registry
from .config import RunConfig
from .domain import ResourceObject
from .engine import score, score_sources
from .scorecard import Grade, Scorecard, TestScore, TestScoreComment

__all__ = [
    "CheckDefinition",
    "CheckRegistry",
    "CheckSelection",
    "Grade",
    "ResourceObject",
    "RunConfig",
    "Scorecard",
    "TestScore",
    "TestScoreComment",
    "build_registry",
    "score",
    "score_sources",
]
