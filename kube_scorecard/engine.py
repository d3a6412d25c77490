from typing import Iterable, Optional, Sequence

from loguru import logger

from .checks import CheckRegistry, build_registry
from .config import RunConfig
from .domain import ResourceObject
from .evaluator import Evaluator
from .parser import NamedSource, parse_sources
from .scorecard import Scorecard, build_scorecard


def score(
    objects: Sequence[ResourceObject], config: RunConfig | None = None, registry: Optional[CheckRegistry] = None
) -> Scorecard:
    """Evaluate the objects with all active checks and build the scorecard.

    Configuration problems are raised before any check is evaluated,
    so either a complete scorecard is returned or nothing at all.

    :param objects: the parsed objects in input order
    :param config: the run configuration. Defaults to a configuration with only the mandatory checks
    :param registry: the checks to choose from. Defaults to the built-in catalog
    :return: the scorecard of the run
    :raises ConfigurationError: if the configuration is invalid
    """
    config = config or RunConfig()
    config.validate()
    registry = registry if registry is not None else build_registry()

    selection = config.selection()
    unknown = selection.unknown_optional(registry)
    if len(unknown) > 0:
        logger.warning(f"Ignoring unknown optional check(s): {', '.join(unknown)}")

    checks = selection.active_checks(registry)
    logger.info(f"Running {len(checks)} of {len(registry)} checks on {len(objects)} object(s)")

    results = Evaluator(checks, max_workers=config.max_workers).evaluate(objects)
    scorecard = build_scorecard(objects, results)
    logger.info(f"Finished scoring with overall grade {scorecard.grade.name}")
    return scorecard


def score_sources(
    sources: Iterable[NamedSource], config: RunConfig | None = None, registry: Optional[CheckRegistry] = None
) -> Scorecard:
    """Parse the sources and score the contained objects.

    :raises ManifestParseError: if a source can not be parsed
    :raises ConfigurationError: if the configuration is invalid
    """
    return score(parse_sources(sources), config, registry)
