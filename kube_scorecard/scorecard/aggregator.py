from typing import Iterable, Sequence

from loguru import logger

from ..domain import ResourceObject
from .models import CheckResult, ObjectScore, Scorecard


def build_scorecard(objects: Sequence[ResourceObject], results: Iterable[CheckResult]) -> Scorecard:
    """Merge the evaluated test scores into a scorecard.

    The results must be in dispatch order, i.e. grouped by the position of their object in `objects`.
    Every object gets an entry, even if no check applied to it. Entries are matched by position,
    so the same object listed twice results in two separate entries.

    :param objects: all objects of the run in input order
    :param results: the check results in dispatch order
    :return: the finished scorecard
    :raises ValueError: if a result does not belong to the object sequence or is out of order
    """
    scores: list[list] = [[] for _ in objects]
    last_position = 0
    for result in results:
        position = result.position
        if not (last_position <= position < len(objects)) or result.object is not objects[position]:
            raise ValueError(f"Got a score for '{result.object}', which is not in dispatch order of the objects")
        scores[position].append(result.score)
        last_position = position

    entries = tuple(ObjectScore(obj, tuple(s)) for obj, s in zip(objects, scores))
    logger.debug(f"Aggregated {sum(len(s) for s in scores)} scores for {len(entries)} objects")
    return Scorecard(entries)
