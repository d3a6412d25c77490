import pytest

from kube_scorecard.domain import ResourceObject
from kube_scorecard.scorecard import Grade

CHECK = "statefulset-has-servicename"


def _service(name: str = "db-headless", cluster_ip: str | None = "None", selector: dict | None = None, namespace=None):
    spec = {"selector": selector if selector is not None else {"app": "db"}}
    if cluster_ip is not None:
        spec["clusterIP"] = cluster_ip
    metadata = {"name": name}
    if namespace is not None:
        metadata["namespace"] = namespace
    return ResourceObject.from_manifest({"apiVersion": "v1", "kind": "Service", "metadata": metadata, "spec": spec})


@pytest.mark.unit
class TestStatefulSetServiceName:
    def test_valid_headless_service(self, testdata, expect):
        assert expect(testdata("statefulset-service.yaml"), CHECK, Grade.AllOK) == []

    def test_missing_service_fails_closed(self, testdata, expect):
        statefulset, _ = testdata("statefulset-service.yaml")
        [comment] = expect([statefulset], CHECK, Grade.Critical)
        assert comment.path == "spec.serviceName"
        assert comment.summary == "StatefulSet does not have a valid serviceName"
        assert "'db-headless' does not exist in namespace 'default'" in comment.description

    def test_missing_service_name(self, statefulset, expect):
        [comment] = expect([statefulset({})], CHECK, Grade.Critical)
        assert comment.summary == "StatefulSet does not have a valid serviceName"

    def test_service_in_other_namespace(self, testdata, expect):
        statefulset, _ = testdata("statefulset-service.yaml")
        expect([statefulset, _service(namespace="other")], CHECK, Grade.Critical)

    def test_explicit_default_namespace_matches(self, testdata, expect):
        statefulset, _ = testdata("statefulset-service.yaml")
        expect([statefulset, _service(namespace="default")], CHECK, Grade.AllOK)

    def test_service_not_headless(self, testdata, expect):
        statefulset, _ = testdata("statefulset-service.yaml")
        [comment] = expect([statefulset, _service(cluster_ip=None)], CHECK, Grade.Critical)
        assert "is not headless" in comment.description

    def test_selector_mismatch(self, testdata, expect):
        statefulset, _ = testdata("statefulset-service.yaml")
        [comment] = expect([statefulset, _service(selector={"app": "other"})], CHECK, Grade.Critical)
        assert "does not match the labels" in comment.description

    def test_service_is_not_scored_by_this_check(self, testdata):
        from kube_scorecard.engine import score

        scorecard = score(testdata("statefulset-service.yaml"))
        assert scorecard.entries[1].object.kind == "Service"
        assert scorecard.entries[1].score_of(CHECK) is None
