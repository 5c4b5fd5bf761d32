import logging
from dataclasses import dataclass

from resource_scaler.discovery import Catalog, discover_api
from resource_scaler.errors import TargetFormatError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Target:
    """The scalable workload resources are pushed into."""

    kind: str
    group_version: str
    name: str
    namespace: str


def make_target(catalog: Catalog, target: str, namespace: str) -> Target:
    splits = target.split("/")
    if len(splits) != 2:
        raise TargetFormatError(f"target format error: {target}")
    kind_hint, name = splits

    kind, group_version = discover_api(catalog, kind_hint)
    logger.debug(f"discovered target {target} = {group_version}.{kind}")
    return Target(kind=kind, group_version=group_version, name=name, namespace=namespace)
