from enum import IntEnum
from typing import Iterable


class Grade(IntEnum):
    """Severity of a test score. A lower value is worse, so the worst grade is the minimum."""

    Critical = 1
    Warning = 5
    AllOK = 10


def worst_grade(grades: Iterable[Grade]) -> Grade:
    """Aggregate grades into a single one.

    :param grades: the grades to aggregate
    :return: the worst grade present or `Grade.AllOK` if there are none
    """
    return min(grades, default=Grade.AllOK)
