from .aggregator import build_scorecard
from .grade import Grade, worst_grade
from .models import CheckResult, ObjectScore, Scorecard, TestScore, TestScoreComment

__all__ = [
    "CheckResult",
    "Grade",
    "ObjectScore",
    "Scorecard",
    "TestScore",
    "TestScoreComment",
    "build_scorecard",
    "worst_grade",
]
