"""Client facade used by the autoscaler.

`new_k8s_client` loads credentials, resolves the scalable target once and
hands back a `K8sClient` exposing the two operations the autoscaler needs.
"""

import logging
from abc import ABC, abstractmethod
from functools import partial

import yaml
from kubernetes import client, config
from kubernetes.config.config_exception import ConfigException

from resource_scaler.cluster_size import ClusterSize, get_cluster_size
from resource_scaler.discovery import preferred_namespaced_resources
from resource_scaler.errors import ConfigurationError
from resource_scaler.patcher import ResourceRequirementsMap, update_resources
from resource_scaler.target import Target, make_target


logger = logging.getLogger(__name__)


class K8sClient(ABC):
    """Wraps all needed client functionalities for the autoscaler."""

    @abstractmethod
    def get_cluster_size(self) -> ClusterSize:
        """Count nodes and cores in the cluster."""

    @abstractmethod
    def update_resources(self, resources: ResourceRequirementsMap) -> None:
        """Update the resource needs for the containers in the target."""


class KubeResourceClient(K8sClient):
    def __init__(self, api_client: client.ApiClient, target: Target):
        self.api_client = api_client
        self.core = client.CoreV1Api(api_client)
        self.apps = client.AppsV1Api(api_client)
        self.target = target
        # last successful read, diagnostics only
        self.cluster_size: ClusterSize | None = None

    def get_cluster_size(self) -> ClusterSize:
        size = get_cluster_size(self.core)
        self.cluster_size = size
        return size

    def update_resources(self, resources: ResourceRequirementsMap) -> None:
        update_resources(
            self.apps,
            self.target,
            resources,
            self.api_client.sanitize_for_serialization,
        )


def load_configuration(kubeconfig: str | None = None) -> client.Configuration:
    """Load credentials from `kubeconfig`, or from the pod service account when empty."""
    configuration = client.Configuration()
    try:
        if kubeconfig:
            config.load_kube_config(config_file=kubeconfig, client_configuration=configuration)
        else:
            config.load_incluster_config(client_configuration=configuration)
    except (ConfigException, OSError, yaml.YAMLError, ValueError, TypeError) as e:
        source = kubeconfig or "in-cluster config"
        raise ConfigurationError(f"failed to load {source}: {e}") from e
    return configuration


def new_k8s_client(namespace: str, target: str, kubeconfig: str | None = None) -> KubeResourceClient:
    api_client = client.ApiClient(load_configuration(kubeconfig))
    tgt = make_target(partial(preferred_namespaced_resources, api_client), target, namespace)
    logger.info(f"Scaling target {tgt.group_version}.{tgt.kind} {tgt.namespace}/{tgt.name}")
    return KubeResourceClient(api_client, tgt)
