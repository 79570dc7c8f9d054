import pytest

from kubejob import testjob as tj
from kubejob.meta import (
    CleanPodPolicy,
    Container,
    ContainerPort,
    PodSpec,
    PodTemplateSpec,
    ReplicaSpec,
    RestartPolicy,
)


def _spec(*containers, replicas=None, restart_policy=None):
    return ReplicaSpec(
        replicas=replicas,
        restart_policy=restart_policy,
        template=PodTemplateSpec(spec=PodSpec(containers=list(containers))),
    )


def _job(specs):
    job = tj.TestJob()
    job.spec.test_replica_specs = specs
    return job


def test_group_version_identity():
    assert str(tj.SCHEME_GROUP_VERSION) == "kubeflow.org/v1"
    gvk = tj.SCHEME_GROUP_VERSION.with_kind("TestJob")
    assert gvk == tj.SCHEME_GROUP_VERSION_KIND
    assert (gvk.group, gvk.version, gvk.kind) == ("kubeflow.org", "v1", "TestJob")


def test_resource_is_group_qualified():
    gr = tj.resource("testjobs")
    assert gr.group == tj.GROUP_NAME
    assert gr.resource == "testjobs"
    assert str(gr) == tj.TESTCRD


def test_with_resource_keeps_version():
    gvr = tj.SCHEME_GROUP_VERSION.with_resource("testjobs")
    assert gvr.version == tj.GROUP_VERSION
    assert gvr.group_resource() == tj.resource("testjobs")


def test_defaults_fill_replicas_policy_and_port():
    job = _job({"Worker": _spec(Container(name=tj.DEFAULT_CONTAINER_NAME))})
    tj.set_defaults_test_job(job)
    spec = job.spec.test_replica_specs["Worker"]
    assert spec.replicas == 1
    assert spec.restart_policy == RestartPolicy.NEVER
    assert job.spec.run_policy.clean_pod_policy == CleanPodPolicy.RUNNING
    ports = spec.template.spec.containers[0].ports
    assert ports == [ContainerPort(name="job-port", container_port=2222)]


def test_defaults_keep_given_values():
    job = _job(
        {
            "Worker": _spec(
                Container(name=tj.DEFAULT_CONTAINER_NAME),
                replicas=3,
                restart_policy=RestartPolicy.ALWAYS,
            )
        }
    )
    job.spec.run_policy.clean_pod_policy = CleanPodPolicy.ALL
    tj.set_defaults_test_job(job)
    spec = job.spec.test_replica_specs["Worker"]
    assert spec.replicas == 3
    assert spec.restart_policy == RestartPolicy.ALWAYS
    assert job.spec.run_policy.clean_pod_policy == CleanPodPolicy.ALL


def test_defaults_create_missing_run_policy():
    job = _job({})
    job.spec.run_policy = None
    tj.set_defaults_test_job(job)
    assert job.spec.run_policy.clean_pod_policy == CleanPodPolicy.RUNNING


def test_type_names_become_camel_case():
    worker = _spec(Container(name=tj.DEFAULT_CONTAINER_NAME))
    master = _spec(Container(name=tj.DEFAULT_CONTAINER_NAME))
    job = _job({"worker": worker, "MASTER": master})
    tj.set_defaults_test_job(job)
    assert set(job.spec.test_replica_specs) == {"Worker", "Master"}
    assert job.spec.test_replica_specs["Worker"] is worker
    assert job.spec.test_replica_specs["Master"] is master


def test_unknown_type_name_is_left_alone():
    job = _job({"ps": _spec(Container(name=tj.DEFAULT_CONTAINER_NAME))})
    tj.set_defaults_test_job(job)
    assert list(job.spec.test_replica_specs) == ["ps"]


def test_existing_port_not_duplicated():
    port = ContainerPort(name=tj.DEFAULT_PORT_NAME, container_port=9999)
    job = _job({"Worker": _spec(Container(name=tj.DEFAULT_CONTAINER_NAME, ports=[port]))})
    tj.set_defaults_test_job(job)
    ports = job.spec.test_replica_specs["Worker"].template.spec.containers[0].ports
    assert ports == [port]


def test_port_goes_to_named_container():
    sidecar = Container(name="sidecar")
    main = Container(name=tj.DEFAULT_CONTAINER_NAME)
    job = _job({"Worker": _spec(sidecar, main)})
    tj.set_defaults_test_job(job)
    assert sidecar.ports == []
    assert [p.name for p in main.ports] == [tj.DEFAULT_PORT_NAME]


def test_port_falls_back_to_first_container():
    first = Container(name="first")
    second = Container(name="second")
    job = _job({"Worker": _spec(first, second)})
    tj.set_defaults_test_job(job)
    assert [p.name for p in first.ports] == [tj.DEFAULT_PORT_NAME]
    assert second.ports == []


def test_spec_without_containers_raises():
    job = _job({"Worker": _spec()})
    with pytest.raises(IndexError):
        tj.set_defaults_test_job(job)


def test_job_carries_kind():
    job = tj.TestJob()
    assert job.kind == tj.KIND
    assert job.api_version == str(tj.SCHEME_GROUP_VERSION)
    assert tj.TestReplicaType("Worker") is tj.TestReplicaType.WORKER