import logging
from dataclasses import asdict, dataclass
from decimal import Decimal

from kubernetes import client
from kubernetes.client.exceptions import ApiException
from kubernetes.utils.quantity import parse_quantity
from urllib3.exceptions import HTTPError

from resource_scaler.errors import ClusterSizeError, NonIntegralCoresError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClusterSize:
    nodes: int = 0
    cores: int = 0

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


def node_cpu_capacity(node: client.V1Node) -> Decimal:
    """Return the CPU capacity reported by a node, zero if it reports none."""
    status = node.status
    capacity = (status.capacity if status else None) or {}
    cpu = capacity.get("cpu")
    if cpu is None:
        return Decimal(0)
    try:
        return parse_quantity(cpu)
    except (ValueError, TypeError) as e:
        name = node.metadata.name if node.metadata else None
        raise ClusterSizeError(f"node {name} reports invalid cpu capacity {cpu!r}: {e}") from e


def get_cluster_size(core: client.CoreV1Api) -> ClusterSize:
    """Count nodes and cores of the whole cluster.

    All nodes are considered, even those marked as unschedulable, this
    includes the control plane.
    """
    try:
        nodes = core.list_node(watch=False)
    except (ApiException, HTTPError) as e:
        raise ClusterSizeError(f"failed to list nodes: {e}") from e
    if nodes is None or not nodes.items:
        return ClusterSize()

    total = sum((node_cpu_capacity(node) for node in nodes.items), Decimal(0))
    if total != total.to_integral_value():
        raise NonIntegralCoresError(
            f"unable to compute integer values of cores in the cluster: {total}"
        )

    size = ClusterSize(nodes=len(nodes.items), cores=int(total))
    logger.debug(f"cluster size: {size.nodes} nodes, {size.cores} cores")
    return size
