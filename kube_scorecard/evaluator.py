from concurrent.futures import ThreadPoolExecutor
from typing import Sequence

from loguru import logger

from .checks.registry import CheckDefinition
from .domain import ObjectIndex, ResourceObject
from .exceptions import UnresolvedReferenceError
from .scorecard import CheckResult, Grade, TestScore, TestScoreComment, worst_grade

logger = logger.bind(component="evaluation")

CHECK_FAILED = "The check failed to evaluate the object"


class Evaluator:
    """Applies the active checks to the objects of a run.

    Every `(object, check)` pair is independent of the others. The pairs can be evaluated in
    parallel, but the results are always returned in dispatch order:
    objects in input order and per object the checks in registration order.
    """

    def __init__(self, checks: Sequence[CheckDefinition], max_workers: int = 1):
        """
        :param checks: the active checks in registration order
        :param max_workers: the number of threads used for the evaluation. Defaults to 1, i.e. sequential
        """
        self.checks = list(checks)
        self.max_workers = max_workers

    def dispatch(self, objects: Sequence[ResourceObject]) -> list[tuple[int, ResourceObject, CheckDefinition]]:
        """Determine every `(object, check)` pair which has to be evaluated, in dispatch order.
        Each pair is prefixed with the position of the object in `objects`."""
        return [
            (pos, obj, check) for pos, obj in enumerate(objects) for check in self.checks if check.applies_to(obj.kind)
        ]

    def evaluate(self, objects: Sequence[ResourceObject]) -> list[CheckResult]:
        """Evaluate all applicable checks for the given objects.

        :param objects: the objects of the run. Relations are resolved against this set
        :return: the result of each evaluated pair in dispatch order
        """
        index = ObjectIndex(objects)
        pairs = self.dispatch(objects)
        logger.debug(f"Evaluating {len(pairs)} check(s) on {len(objects)} object(s)")

        if self.max_workers > 1 and len(pairs) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                # `map` yields in submission order regardless of completion order
                scores = list(pool.map(lambda pair: self.run_check(pair[2], pair[1], index), pairs))
        else:
            scores = [self.run_check(check, obj, index) for _, obj, check in pairs]

        return [CheckResult(pos, obj, score) for (pos, obj, _), score in zip(pairs, scores)]

    @staticmethod
    def run_check(check: CheckDefinition, obj: ResourceObject, index: ObjectIndex) -> TestScore:
        """Evaluate a single check on a single object.

        A missing related object or a failing check never ends the run,
        instead it results in a critical score explaining the problem.

        :param check: the check to evaluate
        :param obj: the object to check
        :param index: the lookup for the related objects
        :return: the resulting test score
        """
        try:
            related = [relation.resolve(obj, index) for relation in check.relations]
        except UnresolvedReferenceError as exc:
            logger.debug(f"{check.check_id}: unresolved reference of {obj}: {exc.summary}")
            comment = TestScoreComment(exc.path, exc.summary, exc.description)
            return TestScore(check.check_id, check.name, Grade.Critical, (comment,))

        try:
            findings = check.func(obj, *related)
        except Exception as exc:
            logger.opt(exception=exc).error(f"Check '{check.check_id}' failed for {obj}: {exc}")
            comment = TestScoreComment("", CHECK_FAILED, f"{type(exc).__name__}: {exc}")
            return TestScore(check.check_id, check.name, Grade.Critical, (comment,))

        grade = worst_grade(f.grade for f in findings)
        return TestScore(check.check_id, check.name, grade, tuple(f.comment for f in findings))
