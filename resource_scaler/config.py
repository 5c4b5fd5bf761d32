import logging
import os
from dataclasses import dataclass

import yaml

from resource_scaler.errors import ConfigurationError


DEFAULT_CONFIG_FILE = "/config.yaml"

ENV_CONFIG = "SCALER_CONFIG"
ENV_NAMESPACE = "SCALER_NAMESPACE"
ENV_TARGET = "SCALER_TARGET"
ENV_KUBECONFIG = "KUBECONFIG"
ENV_LOG_LEVEL = "SCALER_LOG_LEVEL"


@dataclass
class ScalerConfig:
    namespace: str
    target: str
    kubeconfig: str | None = None
    log_level: int = logging.INFO


def read_config_file(configfile: str) -> dict:
    """Return the YAML document in `configfile`, an empty dict if there is no such file."""
    if not os.path.exists(configfile):
        return {}
    with open(configfile) as file:
        try:
            config = yaml.safe_load(file)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"failed to parse config file {configfile}: {e}") from e
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigurationError(f"config file {configfile} must hold a mapping")
    return config


def parse_log_level(value) -> int:
    if isinstance(value, int):
        return value
    level = logging.getLevelName(str(value).upper())
    if not isinstance(level, int):
        raise ConfigurationError(f"unknown log level {value!r}")
    return level


def load_config(configfile: str | None = None) -> ScalerConfig:
    """Read settings from the YAML file, letting the environment override them."""
    configfile = configfile or os.getenv(ENV_CONFIG, DEFAULT_CONFIG_FILE)
    config = read_config_file(configfile)

    namespace = os.getenv(ENV_NAMESPACE) or config.get("namespace")
    target = os.getenv(ENV_TARGET) or config.get("target")
    kubeconfig = os.getenv(ENV_KUBECONFIG) or config.get("kubeconfig")
    log_level = os.getenv(ENV_LOG_LEVEL) or config.get("logLevel", logging.INFO)

    if not namespace:
        raise ConfigurationError(f"namespace not defined in {configfile} or {ENV_NAMESPACE}")
    if not target:
        raise ConfigurationError(f"target not defined in {configfile} or {ENV_TARGET}")

    return ScalerConfig(
        namespace=namespace,
        target=target,
        kubeconfig=kubeconfig or None,
        log_level=parse_log_level(log_level),
    )
