from dataclasses import asdict, dataclass
from enum import auto
from typing import NamedTuple, Optional

import pandas as pd
from strenum import SnakeCaseStrEnum

from ..domain import ResourceObject
from .grade import Grade, worst_grade


@dataclass(frozen=True)
class TestScoreComment:
    __test__ = False  # not a pytest test class

    path: str
    summary: str
    description: str = ""


@dataclass(frozen=True)
class TestScore:
    """The result of one check against one object."""

    __test__ = False

    check_id: str
    check_name: str
    grade: Grade
    comments: tuple[TestScoreComment, ...] = ()

    def to_dict(self) -> dict:
        return {
            "check_id": self.check_id,
            "check_name": self.check_name,
            "grade": self.grade.name,
            "comments": [asdict(c) for c in self.comments],
        }


class CheckResult(NamedTuple):
    """A test score along with the object it belongs to.

    `position` is the index of the object in the evaluated input.
    The same object can occur multiple times in the input, so only the position identifies its entry.
    """

    position: int
    object: ResourceObject
    score: TestScore


@dataclass(frozen=True)
class ObjectScore:
    object: ResourceObject
    scores: tuple[TestScore, ...] = ()

    @property
    def grade(self) -> Grade:
        return worst_grade(s.grade for s in self.scores)

    def score_of(self, check_id: str) -> Optional[TestScore]:
        return next((s for s in self.scores if s.check_id == check_id), None)

    def to_dict(self) -> dict:
        obj = self.object
        location = obj.location
        return {
            "kind": obj.kind,
            "api_version": obj.api_version,
            "namespace": obj.namespace,
            "name": obj.name,
            "file_name": location.file_name if location else None,
            "file_line": location.line if location else None,
            "grade": self.grade.name,
            "checks": [s.to_dict() for s in self.scores],
        }


class Col(SnakeCaseStrEnum):
    Kind = auto()
    Namespace = auto()
    Name = auto()
    File = auto()
    CheckId = auto()
    CheckName = auto()
    Grade = auto()
    Path = auto()
    Summary = auto()
    Description = auto()


@dataclass(frozen=True)
class Scorecard:
    """The complete report of a run: one entry per input object in input order."""

    entries: tuple[ObjectScore, ...] = ()

    @property
    def grade(self) -> Grade:
        return worst_grade(e.grade for e in self.entries)

    @property
    def has_critical(self) -> bool:
        return self.grade == Grade.Critical

    @property
    def has_warning(self) -> bool:
        return any(s.grade == Grade.Warning for e in self.entries for s in e.scores)

    def __len__(self):
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    def to_dict(self) -> dict:
        return {"grade": self.grade.name, "objects": [e.to_dict() for e in self.entries]}

    def to_dataframe(self) -> pd.DataFrame:
        """Flatten the scorecard into a table with one row per comment.
        Scores without comments still get a single row with empty comment columns.

        :return: the dataframe in the order of the scorecard
        """
        rows = []
        for entry in self.entries:
            obj = entry.object
            base = {
                Col.Kind: obj.kind,
                Col.Namespace: obj.namespace or "",
                Col.Name: obj.name,
                Col.File: str(obj.location) if obj.location else "",
            }
            for score in entry.scores:
                check = {**base, Col.CheckId: score.check_id, Col.CheckName: score.check_name}
                check[Col.Grade] = score.grade.name
                if not score.comments:
                    rows.append({**check, Col.Path: "", Col.Summary: "", Col.Description: ""})
                for comment in score.comments:
                    rows.append(
                        {
                            **check,
                            Col.Path: comment.path,
                            Col.Summary: comment.summary,
                            Col.Description: comment.description,
                        }
                    )
        return pd.DataFrame(rows, columns=[str(c) for c in Col])
