from resource_scaler.client import K8sClient, KubeResourceClient, new_k8s_client
from resource_scaler.cluster_size import ClusterSize
from resource_scaler.discovery import WorkloadKind
from resource_scaler.target import Target

__all__ = [
    "K8sClient",
    "KubeResourceClient",
    "new_k8s_client",
    "ClusterSize",
    "WorkloadKind",
    "Target",
]
