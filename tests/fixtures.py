import json
from urllib.parse import urlparse

from kubernetes.client import (
    V1APIResource,
    V1APIResourceList,
    V1Node,
    V1NodeList,
    V1NodeStatus,
    V1ObjectMeta,
)


def api_resource(name: str, kind: str, namespaced: bool = True) -> V1APIResource:
    return V1APIResource(
        name=name,
        kind=kind,
        namespaced=namespaced,
        singular_name="",
        verbs=["get", "list", "patch"],
    )


def resource_list(group_version: str, *resources: V1APIResource) -> V1APIResourceList:
    return V1APIResourceList(group_version=group_version, resources=list(resources))


def node(name: str, cpu: str | None) -> V1Node:
    capacity = {"cpu": cpu, "memory": "8Gi"} if cpu is not None else {"memory": "8Gi"}
    return V1Node(metadata=V1ObjectMeta(name=name), status=V1NodeStatus(capacity=capacity))


def node_list(*cpus: str | None) -> V1NodeList:
    return V1NodeList(items=[node(f"node-{i}", cpu) for i, cpu in enumerate(cpus)])




class StaticResponse:
    """Stands in for the REST layer's response object."""

    def __init__(self, body: dict, status: int = 200):
        self.status = status
        self.reason = "OK"
        self.data = json.dumps(body).encode("utf-8")
        self.headers = {"content-type": "application/json"}

    def read(self) -> bytes:
        return self.data

    def getheaders(self) -> dict:
        return self.headers

    def getheader(self, name: str, default=None):
        return self.headers.get(name.lower(), default)


DISCOVERY_DOCUMENTS = {
    "/api/v1": {
        "kind": "APIResourceList",
        "groupVersion": "v1",
        "resources": [
            {"name": "pods", "singularName": "pod", "namespaced": True, "kind": "Pod", "verbs": ["get", "list"]},
            {"name": "nodes", "singularName": "node", "namespaced": False, "kind": "Node", "verbs": ["get", "list"]},
        ],
    },
    "/apis": {
        "kind": "APIGroupList",
        "apiVersion": "v1",
        "groups": [
            {
                "name": "apps",
                "versions": [{"groupVersion": "apps/v1", "version": "v1"}],
                "preferredVersion": {"groupVersion": "apps/v1", "version": "v1"},
            },
        ],
    },
    "/apis/apps/v1": {
        "kind": "APIResourceList",
        "groupVersion": "apps/v1",
        "resources": [
            {
                "name": "deployments",
                "singularName": "deployment",
                "namespaced": True,
                "kind": "Deployment",
                "verbs": ["get", "list", "patch"],
            },
            {
                "name": "deployments/scale",
                "singularName": "",
                "namespaced": True,
                "kind": "Scale",
                "verbs": ["get", "patch"],
            },
        ],
    },
}


def serve_discovery(method: str, url: str, *args, **kwargs) -> StaticResponse:
    return StaticResponse(DISCOVERY_DOCUMENTS[urlparse(url).path.rstrip("/")])
