"""
Shared fixtures and helpers for the kube-scorecard tests.
"""

from pathlib import Path

import pytest
from loguru import logger

from kube_scorecard.checks import build_registry
from kube_scorecard.config import RunConfig
from kube_scorecard.domain import ResourceObject
from kube_scorecard.engine import score
from kube_scorecard.parser import NamedSource, parse_source
from kube_scorecard.scorecard import Grade, TestScoreComment
from kube_scorecard.version import KubernetesVersion

TESTDATA = Path(__file__).parent / "testdata"


def make_statefulset(ctx: dict | None = None, pod_ctx: dict | None = None, name: str = "foo") -> ResourceObject:
    """Build a StatefulSet with a single container called "foobar" and the given security contexts."""
    container = {"name": "foobar", "image": "foo/bar:123"}
    if ctx is not None:
        container["securityContext"] = ctx
    pod_spec = {"containers": [container]}
    if pod_ctx is not None:
        pod_spec["securityContext"] = pod_ctx

    return ResourceObject.from_manifest(
        {
            "apiVersion": "apps/v1",
            "kind": "StatefulSet",
            "metadata": {"name": name},
            "spec": {
                "selector": {"matchLabels": {"app": "foo"}},
                "template": {"metadata": {"labels": {"app": "foo"}}, "spec": pod_spec},
            },
        }
    )


def load_testdata(file_name: str) -> list[ResourceObject]:
    path = TESTDATA / file_name
    return parse_source(NamedSource(path.name, path.read_bytes()))


def expect_score(
    objects: list[ResourceObject], check_id: str, expected_grade: Grade, version: str | None = None
) -> list[TestScoreComment]:
    """Score the objects with the given check enabled and assert the grade of the check on the first object.

    :return: the comments of the test score
    """
    config = RunConfig(
        kubernetes_version=KubernetesVersion.parse(version) if version else None,
        enabled_optional_checks=frozenset([check_id]),
    )
    scorecard = score(objects, config)
    test_score = scorecard.entries[0].score_of(check_id)
    assert test_score is not None, f"no score for '{check_id}'"
    assert test_score.grade == expected_grade
    return list(test_score.comments)


@pytest.fixture(scope="function")
def registry():
    return build_registry()


@pytest.fixture
def caplog_loguru(caplog):
    """Forward loguru messages to the pytest log capture."""
    handler_id = logger.add(caplog.handler, format="{message}", level="DEBUG")
    yield caplog
    logger.remove(handler_id)


@pytest.fixture
def statefulset():
    """Factory for StatefulSets with the given container and pod security contexts."""
    return make_statefulset


@pytest.fixture
def testdata():
    """Loader for the manifests in the testdata folder."""
    return load_testdata


@pytest.fixture
def expect():
    """Score objects and assert the grade of a single check."""
    return expect_score


@pytest.fixture
def testdata_dir() -> Path:
    return TESTDATA
