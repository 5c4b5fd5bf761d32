"""Command entry point for the autoscaler.

Reads a JSON request on stdin and writes a JSON answer on stdout:

  {"op": "cluster_size"}
  {"op": "update_resources", "resources": {"<container>": {"requests": {...}, "limits": {...}}}}

Errors are logged and answered with {"result": "error"}; requests that
cannot be understood are answered with {"result": "skip"}.
"""

import json
import sys
from typing import Any

from kubernetes.client import V1ResourceRequirements

from resource_scaler.adapter_logger import AdapterLogger
from resource_scaler.client import new_k8s_client
from resource_scaler.config import load_config
from resource_scaler.errors import ResourceScalerError


OP_CLUSTER_SIZE = "cluster_size"
OP_UPDATE_RESOURCES = "update_resources"


def parse_resources(raw: Any) -> dict[str, V1ResourceRequirements] | None:
    """Turn {"<container>": {"requests": ..., "limits": ...}} into requirement models."""
    if not isinstance(raw, dict) or not raw:
        return None
    resources = {}
    for name, spec in raw.items():
        if not isinstance(spec, dict):
            return None
        resources[name] = V1ResourceRequirements(
            requests=spec.get("requests"),
            limits=spec.get("limits"),
        )
    return resources


def main(spec_raw: str) -> int:
    adapter = AdapterLogger("resource_scaler")
    logger = adapter.logger

    try:
        spec = json.loads(spec_raw)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON on stdin: {e}")
        sys.stdout.write(json.dumps({"result": "skip"}))
        return 0

    op = spec.get("op") if isinstance(spec, dict) else None
    if op not in (OP_CLUSTER_SIZE, OP_UPDATE_RESOURCES):
        logger.error(f"Unknown operation '{op}'")
        sys.stdout.write(json.dumps({"result": "skip"}))
        return 0

    resources = None
    if op == OP_UPDATE_RESOURCES:
        resources = parse_resources(spec.get("resources"))
        if resources is None:
            logger.error("Spec must include a 'resources' mapping of container name to requirements")
            sys.stdout.write(json.dumps({"result": "skip"}))
            return 0

    try:
        cfg = load_config()
        adapter.set_level(cfg.log_level)
        k8s = new_k8s_client(cfg.namespace, cfg.target, cfg.kubeconfig)

        if op == OP_CLUSTER_SIZE:
            size = k8s.get_cluster_size()
            out: dict[str, Any] = {"op": op, **size.to_dict()}
        else:
            k8s.update_resources(resources)
            out = {
                "op": op,
                "resource": {
                    "kind": k8s.target.kind,
                    "name": k8s.target.name,
                    "namespace": k8s.target.namespace,
                },
                "containers": sorted(resources),
            }
    except ResourceScalerError as e:
        logger.error(f"{op} failed: {e}")
        sys.stdout.write(json.dumps({"result": "error"}))
        return 1

    logger.info(json.dumps(out))
    sys.stdout.write(json.dumps(out))
    return 0


def run() -> None:
    sys.exit(main(sys.stdin.read()))


if __name__ == "__main__":
    run()
