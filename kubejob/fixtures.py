"""Builders of pods, services and TestJob helpers for exercising controllers."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Optional

from kubejob.lister import Indexer, meta_namespace_key
from kubejob.meta import (
    ContainerStatus,
    ObjectMeta,
    OwnerReference,
    Pod,
    PodPhase,
    PodStatus,
    Service,
)
from kubejob.status import ConditionStatus, JobConditionType
from kubejob.testjob import (
    GROUP_NAME,
    KIND,
    SCHEME_GROUP_VERSION,
    SCHEME_GROUP_VERSION_KIND,
    GroupVersionKind,
    TestJob,
)

TEST_IMAGE_NAME = "test-image-for-kubeflow-common:latest"
TEST_JOB_NAME = "test-job"
LABEL_WORKER = "worker"
SLEEP_INTERVAL = 0.5
THREAD_COUNT = 1

LABEL_GROUP_NAME = "group-name"
LABEL_TEST_JOB_NAME = "test-job-name"
TEST_GROUP_NAME = GROUP_NAME

_TEST_REPLICA_TYPE_LABEL = "test-replica-type"
_TEST_REPLICA_INDEX_LABEL = "test-replica-index"
_CONTROLLER_KIND = SCHEME_GROUP_VERSION_KIND


def always_ready() -> bool:
    return True


def gen_labels(job_name: str) -> dict[str, str]:
    """Labels that tie an object to the named job."""
    return {
        LABEL_GROUP_NAME: TEST_GROUP_NAME,
        LABEL_TEST_JOB_NAME: job_name.replace("/", "-"),
    }


def _controller_ref(test_job: TestJob, gvk: GroupVersionKind) -> OwnerReference:
    api_version = f"{gvk.group}/{gvk.version}" if gvk.group else gvk.version
    return OwnerReference(
        api_version=api_version,
        kind=gvk.kind,
        name=test_job.metadata.name,
        uid=test_job.metadata.uid,
        controller=True,
        block_owner_deletion=True,
    )


def gen_owner_reference(test_job: TestJob) -> OwnerReference:
    """Controller owner reference pointing at ``test_job``."""
    return OwnerReference(
        api_version=str(SCHEME_GROUP_VERSION),
        kind=KIND,
        name=test_job.metadata.name,
        uid=test_job.metadata.uid,
        controller=True,
        block_owner_deletion=True,
    )


def _base_meta(name: str, test_job: TestJob) -> ObjectMeta:
    return ObjectMeta(
        name=name,
        namespace=test_job.metadata.namespace,
        labels=gen_labels(test_job.metadata.name),
        owner_references=[_controller_ref(test_job, _CONTROLLER_KIND)],
    )


def new_base_pod(name: str, test_job: TestJob) -> Pod:
    return Pod(metadata=_base_meta(name, test_job))


def new_pod(test_job: TestJob, typ: str, index: int) -> Pod:
    pod = new_base_pod(f"{typ}-{index}", test_job)
    pod.metadata.labels[_TEST_REPLICA_TYPE_LABEL] = typ
    pod.metadata.labels[_TEST_REPLICA_INDEX_LABEL] = str(index)
    return pod


def new_pod_list(
    count: int, status: PodPhase, test_job: TestJob, typ: str, start: int
) -> list[Pod]:
    """``count`` pods in phase ``status``, indexed from ``start``."""
    pods = []
    for index in range(start, start + count):
        pod = new_pod(test_job, typ, index)
        pod.status = PodStatus(phase=status)
        pods.append(pod)
    return pods


def set_pods_statuses(
    pod_indexer: Indexer,
    test_job: TestJob,
    typ: str,
    pending_pods: int,
    active_pods: int,
    succeeded_pods: int,
    failed_pods: int,
    restart_counts: Optional[Sequence[int]],
) -> None:
    """Add pods in each phase to the indexer, numbered consecutively."""
    index = 0
    for pod in new_pod_list(pending_pods, PodPhase.PENDING, test_job, typ, index):
        pod_indexer.add(pod)
    index += pending_pods

    running = new_pod_list(active_pods, PodPhase.RUNNING, test_job, typ, index)
    if restart_counts is not None:
        if len(restart_counts) < len(running):
            raise ValueError("fewer restart counts than active pods")
        for pod, count in zip(running, restart_counts):
            pod.status.container_statuses = [ContainerStatus(restart_count=count)]
    for pod in running:
        pod_indexer.add(pod)
    index += active_pods

    for pod in new_pod_list(succeeded_pods, PodPhase.SUCCEEDED, test_job, typ, index):
        pod_indexer.add(pod)
    index += succeeded_pods

    for pod in new_pod_list(failed_pods, PodPhase.FAILED, test_job, typ, index):
        pod_indexer.add(pod)


def new_base_service(name: str, test_job: TestJob) -> Service:
    return Service(metadata=_base_meta(name, test_job))


def new_service(test_job: TestJob, typ: str, index: int) -> Service:
    service = new_base_service(f"{typ}-{index}", test_job)
    service.metadata.labels[_TEST_REPLICA_TYPE_LABEL] = typ
    service.metadata.labels[_TEST_REPLICA_INDEX_LABEL] = str(index)
    return service


def new_service_list(count: int, test_job: TestJob, typ: str) -> list[Service]:
    return [new_service(test_job, typ, index) for index in range(count)]


def set_services(
    service_indexer: Indexer, test_job: TestJob, typ: str, active_worker_services: int
) -> None:
    for service in new_service_list(active_worker_services, test_job, typ):
        service_indexer.add(service)


def get_key(test_job: TestJob) -> str:
    """Store key of the job."""
    return meta_namespace_key(test_job)


def check_condition(
    test_job: TestJob, condition: JobConditionType, reason: str
) -> bool:
    """Whether the job has a true condition of this type with this reason."""
    return any(
        c.type == condition and c.status == ConditionStatus.TRUE and c.reason == reason
        for c in test_job.status.conditions
    )