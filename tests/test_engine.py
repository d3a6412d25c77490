import pytest

from kube_scorecard.checks import CheckDefinition, CheckRegistry
from kube_scorecard.config import RunConfig
from kube_scorecard.engine import score, score_sources
from kube_scorecard.exceptions import ConfigurationError
from kube_scorecard.parser import NamedSource
from kube_scorecard.scorecard import Grade, TestScoreComment
from kube_scorecard.version import KubernetesVersion

OPTIONAL = frozenset(["container-security-context", "container-seccomp-profile"])


@pytest.mark.integration
class TestScoring:
    def test_all_good_pod(self, statefulset):
        ctx = {
            "readOnlyRootFilesystem": True,
            "runAsGroup": 23000,
            "runAsUser": 33000,
            "runAsNonRoot": True,
            "privileged": False,
        }
        config = RunConfig(enabled_optional_checks=frozenset(["container-security-context"]))
        [entry] = score([statefulset(ctx)], config)
        test_score = entry.score_of("container-security-context")
        assert test_score.grade == Grade.AllOK
        assert test_score.comments == ()

    def test_missing_context_is_critical(self, statefulset):
        [entry] = score([statefulset(None)])
        assert entry.grade == Grade.Critical
        assert TestScoreComment(
            "foobar",
            "Container has no configured security context",
            "Set securityContext to run the container in a more secure context.",
        ) in entry.score_of("container-security-context-user-group-id").comments

    def test_scores_follow_registration_order(self, testdata, registry):
        config = RunConfig(enabled_optional_checks=OPTIONAL)
        [entry] = score(testdata("pod-security-context-all-good.yaml"), config, registry)
        expected = [c.check_id for c in registry.all() if "Pod" in c.target_kinds and c.check_id != "stable-version"]
        assert [s.check_id for s in entry.scores] == expected

    @pytest.mark.parametrize("workers", [1, 4])
    def test_same_object_twice_gets_two_full_entries(self, statefulset, workers):
        obj = statefulset(None)
        scorecard = score([obj, obj], RunConfig(max_workers=workers))
        assert len(scorecard) == 2
        first, second = scorecard.entries
        assert len(first.scores) > 0
        assert first.scores == second.scores

    def test_optional_checks_are_absent_unless_enabled(self, testdata):
        scorecard = score(testdata("pod-security-context-all-good.yaml"))
        ids = {s.check_id for e in scorecard for s in e.scores}
        assert ids.isdisjoint(OPTIONAL)

    def test_version_gated_check_is_skipped(self, testdata):
        deployment = testdata("security-inherit-pod-security-context.yaml")
        old = score(deployment, RunConfig(kubernetes_version=KubernetesVersion(1, 8)))
        new = score(deployment, RunConfig(kubernetes_version=KubernetesVersion(1, 18)))
        assert old.entries[0].score_of("stable-version") is None
        assert new.entries[0].score_of("stable-version").grade == Grade.AllOK

    def test_object_grade_is_worst_score(self, testdata):
        config = RunConfig(enabled_optional_checks=OPTIONAL)
        for entry in score(testdata("pod-security-context-privileged.yaml"), config):
            assert entry.grade == min(s.grade for s in entry.scores)
            assert entry.grade == Grade.Critical

    def test_unknown_optional_check_is_ignored(self, testdata, caplog_loguru):
        config = RunConfig(enabled_optional_checks=frozenset(["does-not-exist"]))
        scorecard = score(testdata("pod-security-context-all-good.yaml"), config)
        assert len(scorecard) == 1
        assert "does-not-exist" in caplog_loguru.text

    def test_invalid_configuration_aborts(self, testdata):
        with pytest.raises(ConfigurationError):
            score(testdata("pod-security-context-all-good.yaml"), RunConfig(max_workers=0))

    def test_custom_registry(self, testdata):
        registry = CheckRegistry()
        registry.register(
            CheckDefinition("always-ok", "Always OK", frozenset(["Pod"]), func=lambda obj: [])
        )
        [entry] = score(testdata("pod-security-context-all-good.yaml"), registry=registry)
        assert [s.check_id for s in entry.scores] == ["always-ok"]


@pytest.mark.integration
class TestDeterminism:
    def _sources(self, testdata_dir):
        return [NamedSource(p.name, p.read_bytes()) for p in sorted(testdata_dir.glob("*.yaml"))]

    @pytest.mark.parametrize("workers", [1, 4])
    def test_identical_runs(self, testdata_dir, workers):
        config = RunConfig(enabled_optional_checks=OPTIONAL, max_workers=workers)
        first = score_sources(self._sources(testdata_dir), config)
        second = score_sources(self._sources(testdata_dir), config)
        assert first.to_dict() == second.to_dict()

    def test_parallel_equals_sequential(self, testdata_dir):
        sources = self._sources(testdata_dir)
        sequential = score_sources(sources, RunConfig(enabled_optional_checks=OPTIONAL))
        parallel = score_sources(sources, RunConfig(enabled_optional_checks=OPTIONAL, max_workers=8))
        assert sequential.to_dict() == parallel.to_dict()
