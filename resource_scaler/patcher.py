"""Builds and submits the container resources patch for a workload.

Deployments, DaemonSets and ReplicaSets share the pod template layout, so
one document shape works for all of them; only the collection differs.
"""

import logging
from typing import Any, Callable, Mapping

from kubernetes import client
from kubernetes.client.exceptions import ApiException
from urllib3.exceptions import HTTPError

from resource_scaler.discovery import WorkloadKind
from resource_scaler.errors import PatchError, UnknownTargetKindError
from resource_scaler.target import Target


logger = logging.getLogger(__name__)

# group/version of the collections WorkloadKind patches through
APPS_GROUP_VERSION = "apps/v1"

# container name -> V1ResourceRequirements, or a dict of the same shape
ResourceRequirementsMap = Mapping[str, Any]


def workload_for(kind: str) -> WorkloadKind:
    """Return the workload variant for a canonical kind, ignoring case."""
    lowered = kind.lower()
    for member in WorkloadKind:
        if member.kind.lower() == lowered:
            return member
    raise UnknownTargetKindError(
        f"unknown target kind {kind!r}: must be one of deployment/*, "
        "daemonset/*, or replicaset/* (not case sensitive)"
    )


def build_patch(target: Target, resources: ResourceRequirementsMap) -> dict[str, Any]:
    containers = [
        {"name": name, "resources": requirements}
        for name, requirements in resources.items()
    ]
    return {
        "apiVersion": target.group_version,
        "kind": target.kind,
        "metadata": {"name": target.name},
        "spec": {
            "template": {
                "spec": {
                    "containers": containers,
                },
            },
        },
    }


def update_resources(
    apps: client.AppsV1Api,
    target: Target,
    resources: ResourceRequirementsMap,
    serialize: Callable[[Any], Any],
) -> None:
    workload = workload_for(target.kind)
    if target.group_version != APPS_GROUP_VERSION:
        logger.warning(
            f"{target.kind} discovered in {target.group_version}, "
            f"patching through the {APPS_GROUP_VERSION} collection"
        )

    try:
        body = serialize(build_patch(target, resources))
    except (TypeError, ValueError, AttributeError) as e:
        raise PatchError(f"can't serialize patch: {e}") from e

    logger.info(
        f"Patching {target.kind} {target.namespace}/{target.name} "
        f"containers {sorted(resources)}"
    )
    try:
        workload.patch(apps, target.name, target.namespace, body)
    except (ApiException, HTTPError) as e:
        raise PatchError(f"patch failed: {e}") from e
