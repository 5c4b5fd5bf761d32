"""Workload kinds and runtime discovery of the API group serving them.

The cluster decides which group/version serves a Deployment, DaemonSet or
ReplicaSet. We ask its resource catalog instead of hard coding `apps/v1`.
"""

import logging
from enum import Enum
from typing import Any, Callable

from kubernetes import client
from kubernetes.client import ApiClient, V1APIResourceList
from kubernetes.client.exceptions import ApiException
from urllib3.exceptions import HTTPError

from resource_scaler.errors import DiscoveryError, UnsupportedKindError


logger = logging.getLogger(__name__)

STRATEGIC_MERGE_PATCH = "application/strategic-merge-patch+json"

Catalog = Callable[[], list[V1APIResourceList]]


class WorkloadKind(Enum):
    """Supported scalable workloads.

    Each member holds (hint, canonical kind, plural resource name, name of
    the `AppsV1Api` operation patching its collection).
    """

    DEPLOYMENT = ("deployment", "Deployment", "deployments", "patch_namespaced_deployment")
    DAEMONSET = ("daemonset", "DaemonSet", "daemonsets", "patch_namespaced_daemon_set")
    REPLICASET = ("replicaset", "ReplicaSet", "replicasets", "patch_namespaced_replica_set")

    def __init__(self, hint: str, kind: str, plural: str, patch_operation: str):
        self.hint = hint
        self.kind = kind
        self.plural = plural
        self.patch_operation = patch_operation

    @classmethod
    def from_hint(cls, hint: str) -> "WorkloadKind":
        """Return the member for a user supplied kind, ignoring case."""
        lowered = hint.lower()
        for member in cls:
            if member.hint == lowered:
                return member
        raise UnsupportedKindError(f"unsupported kind {hint!r}")

    def patch(self, apps: client.AppsV1Api, name: str, namespace: str, body: dict[str, Any]) -> Any:
        operation = getattr(apps, self.patch_operation)
        return operation(
            name=name,
            namespace=namespace,
            body=body,
            _content_type=STRATEGIC_MERGE_PATCH,
        )


def _group_resources(api_client: ApiClient, group_version: str) -> V1APIResourceList:
    path = f"/apis/{group_version}"
    headers = {"Accept": "application/json"}
    if not hasattr(api_client, "param_serialize"):
        # clients generated before openapi-generator 7
        return api_client.call_api(
            path,
            "GET",
            header_params=headers,
            response_type="V1APIResourceList",
            auth_settings=["BearerToken"],
            _return_http_data_only=True,
        )

    request = api_client.param_serialize(
        method="GET",
        resource_path=path,
        header_params=headers,
        auth_settings=["BearerToken"],
    )
    response = api_client.call_api(*request)
    response.read()
    return api_client.response_deserialize(
        response_data=response,
        response_types_map={"200": "V1APIResourceList"},
    ).data


def _namespaced_only(resource_list: V1APIResourceList) -> V1APIResourceList:
    resources = [
        r for r in (resource_list.resources or [])
        if r.namespaced and "/" not in r.name
    ]
    return V1APIResourceList(group_version=resource_list.group_version, resources=resources)


def preferred_namespaced_resources(api_client: ApiClient) -> list[V1APIResourceList]:
    """Return the namespaced resources of the core group and of every group's preferred version."""
    lists = [client.CoreV1Api(api_client).get_api_resources()]
    groups = client.ApisApi(api_client).get_api_versions().groups or []
    for group in groups:
        lists.append(_group_resources(api_client, group.preferred_version.group_version))
    filtered = [_namespaced_only(lst) for lst in lists]
    return [lst for lst in filtered if lst.resources]


def discover_api(catalog: Catalog, kind_hint: str) -> tuple[str, str]:
    """Resolve `kind_hint` into the (kind, group_version) served by the cluster.

    The first resource list serving the kind's plural name wins.
    """
    workload = WorkloadKind.from_hint(kind_hint)

    try:
        resource_lists = catalog()
    except (ApiException, HTTPError, ValueError) as e:
        raise DiscoveryError(f"failed to discover apigroup for kind {workload.kind!r}: {e}") from e

    for resource_list in resource_lists or []:
        for res in resource_list.resources or []:
            if res.name == workload.plural:
                logger.debug(f"{workload.plural} served by {resource_list.group_version}")
                return res.kind, resource_list.group_version

    raise DiscoveryError(f"no api group serves {workload.plural!r}")
