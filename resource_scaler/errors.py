"""Errors raised by the resource scaler client.

Everything derives from `ResourceScalerError` so callers can catch the
whole family at once.
"""


class ResourceScalerError(Exception):
    pass


class ConfigurationError(ResourceScalerError):
    """Bad credentials, unreadable kubeconfig or incomplete settings."""


class TargetFormatError(ResourceScalerError):
    pass


class DiscoveryError(ResourceScalerError):
    """The API group serving a workload kind could not be determined."""


class UnsupportedKindError(DiscoveryError):
    pass


class ClusterSizeError(ResourceScalerError):
    pass


class NonIntegralCoresError(ClusterSizeError):
    pass


class PatchError(ResourceScalerError):
    pass


class UnknownTargetKindError(PatchError):
    pass
