import pytest
from kubernetes.client import V1APIResourceList

from resource_scaler.target import Target
from tests.fixtures import api_resource, resource_list


@pytest.fixture(autouse=True)
def no_log_file(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SCALER_LOG_FILE", "")


@pytest.fixture
def catalog() -> list[V1APIResourceList]:
    return [
        resource_list(
            "v1",
            api_resource("pods", "Pod"),
            api_resource("services", "Service"),
        ),
        resource_list(
            "apps/v1",
            api_resource("daemonsets", "DaemonSet"),
            api_resource("deployments", "Deployment"),
            api_resource("replicasets", "ReplicaSet"),
            api_resource("statefulsets", "StatefulSet"),
        ),
        resource_list(
            "batch/v1",
            api_resource("jobs", "Job"),
        ),
    ]


@pytest.fixture
def deployment_target() -> Target:
    return Target(kind="Deployment", group_version="apps/v1", name="web", namespace="ns1")
