"""Core object model: metadata, pods, services and replica specifications."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional


@dataclass
class OwnerReference:
    """A reference from an object to the object that owns it."""

    api_version: str = ""
    kind: str = ""
    name: str = ""
    uid: str = ""
    controller: Optional[bool] = None
    block_owner_deletion: Optional[bool] = None


@dataclass
class ObjectMeta:
    """Metadata shared by every stored object."""

    name: str = ""
    namespace: str = ""
    uid: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    owner_references: list[OwnerReference] = field(default_factory=list)
    deletion_timestamp: Optional[datetime] = None


class PodPhase(str, Enum):
    """Lifecycle phase of a pod."""

    PENDING = "Pending"
    RUNNING = "Running"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"
    UNKNOWN = "Unknown"


@dataclass
class ContainerPort:
    name: str = ""
    container_port: int = 0


@dataclass
class Container:
    name: str = ""
    image: str = ""
    args: list[str] = field(default_factory=list)
    ports: list[ContainerPort] = field(default_factory=list)


@dataclass
class ContainerStatus:
    restart_count: int = 0


@dataclass
class PodSpec:
    containers: list[Container] = field(default_factory=list)


@dataclass
class PodTemplateSpec:
    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: PodSpec = field(default_factory=PodSpec)


@dataclass
class PodStatus:
    phase: Optional[PodPhase] = None
    container_statuses: list[ContainerStatus] = field(default_factory=list)


@dataclass
class Pod:
    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: PodSpec = field(default_factory=PodSpec)
    status: PodStatus = field(default_factory=PodStatus)


@dataclass
class Service:
    metadata: ObjectMeta = field(default_factory=ObjectMeta)


@dataclass
class Unstructured:
    """An object held as a plain nested mapping."""

    object: dict[str, Any] = field(default_factory=dict)

    def _metadata_string(self, key: str) -> str:
        metadata = self.object.get("metadata")
        if not isinstance(metadata, dict):
            return ""
        value = metadata.get(key, "")
        return value if isinstance(value, str) else ""

    def kind(self) -> str:
        value = self.object.get("kind", "")
        return value if isinstance(value, str) else ""

    def name(self) -> str:
        return self._metadata_string("name")

    def namespace(self) -> str:
        return self._metadata_string("namespace")

    def uid(self) -> str:
        return self._metadata_string("uid")


class RestartPolicy(str, Enum):
    ALWAYS = "Always"
    ON_FAILURE = "OnFailure"
    NEVER = "Never"
    EXIT_CODE = "ExitCode"


class CleanPodPolicy(str, Enum):
    ALL = "All"
    RUNNING = "Running"
    NONE = "None"


@dataclass
class RunPolicy:
    clean_pod_policy: Optional[CleanPodPolicy] = None
    ttl_seconds_after_finished: Optional[int] = None
    active_deadline_seconds: Optional[int] = None
    backoff_limit: Optional[int] = None


@dataclass
class ReplicaSpec:
    """Desired state of one replica type; replicas defaults to 1 when unset."""

    replicas: Optional[int] = None
    template: PodTemplateSpec = field(default_factory=PodTemplateSpec)
    restart_policy: Optional[RestartPolicy] = None


@dataclass
class ReplicaStatus:
    active: int = 0
    succeeded: int = 0
    failed: int = 0


def get_controller_of(obj: Any) -> Optional[OwnerReference]:
    """Return the owner reference marked as controller of ``obj``, if any."""
    return next(
        (ref for ref in obj.metadata.owner_references if ref.controller),
        None,
    )