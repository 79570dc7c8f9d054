"""The TestJob resource: its identity, types and defaulting rules."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from kubejob.meta import (
    CleanPodPolicy,
    ContainerPort,
    ObjectMeta,
    PodSpec,
    ReplicaSpec,
    RestartPolicy,
    RunPolicy,
)
from kubejob.status import JobStatus

ENV_KUBEFLOW_NAMESPACE = "KUBEFLOW_NAMESPACE"
DEFAULT_PORT_NAME = "job-port"
DEFAULT_CONTAINER_NAME = "test-container"
DEFAULT_PORT = 2222
DEFAULT_RESTART_POLICY = RestartPolicy.NEVER

GROUP_NAME = "kubeflow.org"
KIND = "TestJob"
GROUP_VERSION = "v1"
PLURAL = "testjobs"
SINGULAR = "testjob"
TESTCRD = "testjobs.kubeflow.org"


@dataclass(frozen=True)
class GroupVersionKind:
    group: str
    version: str
    kind: str


@dataclass(frozen=True)
class GroupResource:
    group: str
    resource: str

    def __str__(self) -> str:
        return f"{self.resource}.{self.group}" if self.group else self.resource


@dataclass(frozen=True)
class GroupVersionResource:
    group: str
    version: str
    resource: str

    def group_resource(self) -> GroupResource:
        return GroupResource(self.group, self.resource)


@dataclass(frozen=True)
class GroupVersion:
    group: str
    version: str

    def __str__(self) -> str:
        return f"{self.group}/{self.version}" if self.group else self.version

    def with_kind(self, kind: str) -> GroupVersionKind:
        return GroupVersionKind(self.group, self.version, kind)

    def with_resource(self, resource: str) -> GroupVersionResource:
        return GroupVersionResource(self.group, self.version, resource)


SCHEME_GROUP_VERSION = GroupVersion(GROUP_NAME, GROUP_VERSION)
SCHEME_GROUP_VERSION_KIND = SCHEME_GROUP_VERSION.with_kind(KIND)


def resource(resource: str) -> GroupResource:
    """Qualify an unqualified resource name with this API group."""
    return SCHEME_GROUP_VERSION.with_resource(resource).group_resource()


class TestReplicaType(str, Enum):
    __test__ = False

    WORKER = "Worker"
    MASTER = "Master"


@dataclass
class TestJobSpec:
    """Desired state of a TestJob; replica specs are keyed by replica type name."""

    __test__ = False

    run_policy: Optional[RunPolicy] = field(default_factory=RunPolicy)
    test_replica_specs: dict[str, ReplicaSpec] = field(default_factory=dict)


@dataclass
class TestJob:
    """A generic job used for exercising controllers."""

    __test__ = False

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: TestJobSpec = field(default_factory=TestJobSpec)
    status: JobStatus = field(default_factory=JobStatus)
    kind: str = KIND
    api_version: str = str(SCHEME_GROUP_VERSION)


@dataclass
class TestJobList:
    __test__ = False

    items: list[TestJob] = field(default_factory=list)
    kind: str = KIND + "List"
    api_version: str = str(SCHEME_GROUP_VERSION)


def _set_default_port(spec: PodSpec) -> None:
    index = next(
        (i for i, c in enumerate(spec.containers) if c.name == DEFAULT_CONTAINER_NAME),
        0,
    )
    container = spec.containers[index]
    if not any(port.name == DEFAULT_PORT_NAME for port in container.ports):
        container.ports.append(
            ContainerPort(name=DEFAULT_PORT_NAME, container_port=DEFAULT_PORT)
        )


def _set_default_replicas(spec: ReplicaSpec) -> None:
    if spec.replicas is None:
        spec.replicas = 1
    if not spec.restart_policy:
        spec.restart_policy = DEFAULT_RESTART_POLICY


def _set_type_name_to_camel_case(test_job: TestJob, typ: TestReplicaType) -> None:
    specs = test_job.spec.test_replica_specs
    wanted = typ.value
    for key in list(specs):
        if key.casefold() == wanted.casefold() and key != wanted:
            specs[wanted] = specs.pop(key)
            return


def set_defaults_test_job(test_job: TestJob) -> None:
    """Fill every unspecified field of ``test_job`` with its default."""
    if test_job.spec.run_policy is None:
        test_job.spec.run_policy = RunPolicy()
    if test_job.spec.run_policy.clean_pod_policy is None:
        test_job.spec.run_policy.clean_pod_policy = CleanPodPolicy.RUNNING

    for typ in (TestReplicaType.WORKER, TestReplicaType.MASTER):
        _set_type_name_to_camel_case(test_job, typ)

    for spec in test_job.spec.test_replica_specs.values():
        _set_default_replicas(spec)
        _set_default_port(spec.template.spec)