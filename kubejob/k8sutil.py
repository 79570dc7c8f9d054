"""Cluster configuration, API errors and helpers over pods and replicas."""

from __future__ import annotations

import logging
import os
import socket
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from kubejob.meta import Pod, PodPhase, ReplicaSpec, ReplicaStatus

RECOMMENDED_CONFIG_PATH_ENV_VAR = "KUBECONFIG"

_SERVICE_HOST_ENV = "KUBERNETES_SERVICE_HOST"
_SERVICE_PORT_ENV = "KUBERNETES_SERVICE_PORT"
_IN_CLUSTER_SERVICE_NAME = "kubernetes.default.svc"
_DEFAULT_SERVICE_PORT = "443"
_TOKEN_PATH = "/var/run/secrets/kubernetes.io/serviceaccount/token"
_ROOT_CA_PATH = "/var/run/secrets/kubernetes.io/serviceaccount/ca.crt"

_log = logging.getLogger("kubejob")


class ApiError(Exception):
    """An error reported by the API server."""

    code = 500
    reason = "InternalError"


class AlreadyExistsError(ApiError):
    """The resource being created already exists."""

    code = 409
    reason = "AlreadyExists"

    def __init__(self, resource: Any, name: str) -> None:
        self.resource = str(resource)
        self.name = name
        super().__init__(f'{self.resource} "{name}" already exists')


class NotFoundError(ApiError):
    """The requested resource does not exist."""

    code = 404
    reason = "NotFound"

    def __init__(self, resource: Any, name: str) -> None:
        self.resource = str(resource)
        self.name = name
        super().__init__(f'{self.resource} "{name}" not found')


class DeletionPropagation(str, Enum):
    ORPHAN = "Orphan"
    BACKGROUND = "Background"
    FOREGROUND = "Foreground"


@dataclass
class DeleteOptions:
    grace_period_seconds: Optional[int] = None
    propagation_policy: Optional[DeletionPropagation] = None


@dataclass
class ClusterConfig:
    """Where and how to reach the cluster's API server."""

    host: str = ""
    bearer_token: str = ""
    ca_file: Optional[str] = None
    kubeconfig: Optional[str] = None


def _join_host_port(host: str, port: str) -> str:
    if ":" in host:
        return f"[{host}]:{port}"
    return f"{host}:{port}"


def _in_cluster_config() -> ClusterConfig:
    host = os.environ.get(_SERVICE_HOST_ENV, "")
    port = os.environ.get(_SERVICE_PORT_ENV, "")
    if not host or not port:
        raise RuntimeError(
            "unable to load in-cluster configuration, "
            f"{_SERVICE_HOST_ENV} and {_SERVICE_PORT_ENV} must be defined"
        )
    token = Path(_TOKEN_PATH).read_text()
    ca_file: Optional[str] = None
    if Path(_ROOT_CA_PATH).is_file():
        ca_file = _ROOT_CA_PATH
    else:
        _log.error("Expected to load root CA config from %s, but got err", _ROOT_CA_PATH)
    return ClusterConfig(
        host="https://" + _join_host_port(host, port),
        bearer_token=token,
        ca_file=ca_file,
    )


def get_cluster_config() -> ClusterConfig:
    """Config from the file named by KUBECONFIG, or else from inside the cluster."""
    kubeconfig = os.environ.get(RECOMMENDED_CONFIG_PATH_ENV_VAR, "")
    if kubeconfig:
        path = Path(kubeconfig)
        if not path.is_file():
            raise FileNotFoundError(f"kubeconfig file {kubeconfig} not found")
        return ClusterConfig(kubeconfig=str(path))

    if not os.environ.get(_SERVICE_HOST_ENV):
        _, _, addresses = socket.gethostbyname_ex(_IN_CLUSTER_SERVICE_NAME)
        os.environ[_SERVICE_HOST_ENV] = addresses[0]
    if not os.environ.get(_SERVICE_PORT_ENV):
        os.environ[_SERVICE_PORT_ENV] = _DEFAULT_SERVICE_PORT
    return _in_cluster_config()


def is_already_exists_error(err: BaseException) -> bool:
    return isinstance(err, AlreadyExistsError)


def is_not_found_error(err: BaseException) -> bool:
    return isinstance(err, NotFoundError)


def cascade_delete_options(grace_period_seconds: int) -> DeleteOptions:
    """Delete options that remove dependents in the foreground after a grace period."""
    return DeleteOptions(
        grace_period_seconds=grace_period_seconds,
        propagation_policy=DeletionPropagation.FOREGROUND,
    )


def is_pod_active(pod: Pod) -> bool:
    return (
        pod.status.phase not in (PodPhase.SUCCEEDED, PodPhase.FAILED)
        and pod.metadata.deletion_timestamp is None
    )


def filter_active_pods(pods: Iterable[Pod]) -> list[Pod]:
    """Pods that have not terminated, in their original order."""
    result = []
    for pod in pods:
        if is_pod_active(pod):
            result.append(pod)
        else:
            _log.info(
                "Ignoring inactive pod %s/%s in state %s, deletion time %s",
                pod.metadata.namespace,
                pod.metadata.name,
                pod.status.phase,
                pod.metadata.deletion_timestamp,
            )
    return result


def filter_pod_count(pods: Iterable[Pod], phase: PodPhase) -> int:
    """Number of pods in the given phase."""
    return sum(1 for pod in pods if pod.status.phase == phase)


def get_total_replicas(replicas: Mapping[Any, ReplicaSpec]) -> int:
    """Sum of replicas over all specs; an unset count counts as one."""
    return sum(
        spec.replicas if spec.replicas is not None else 1 for spec in replicas.values()
    )


def get_total_failed_replicas(replicas: Mapping[Any, ReplicaStatus]) -> int:
    return sum(status.failed for status in replicas.values())