from dataclasses import dataclass

from ..scorecard import Grade, TestScoreComment


@dataclass(frozen=True)
class Finding:
    """A single violation reported by a check, i.e. a comment along with the grade it contributes."""

    grade: Grade
    path: str
    summary: str
    description: str = ""

    @property
    def comment(self) -> TestScoreComment:
        return TestScoreComment(path=self.path, summary=self.summary, description=self.description)
