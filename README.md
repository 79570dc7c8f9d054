# kubejob

Building blocks for controllers that run distributed training jobs on a
cluster: job condition bookkeeping, replica and pod accounting, exit-code
classification, loggers that carry job context, and a small in-memory
`TestJob` resource with an indexer and listers for exercising controller
logic in tests. The package has no third-party dependencies.

## Installation

```
pip install .
```

For running the test suite:

```
pip install ".[test]"
pytest
```

## Modules

- `kubejob.meta` – object metadata, pods, services, replica specs and
  statuses as dataclasses (`ObjectMeta`, `OwnerReference`, `Pod`, `PodPhase`,
  `Service`, `ReplicaSpec`, `ReplicaStatus`, `RunPolicy`, `RestartPolicy`,
  `CleanPodPolicy`), `Unstructured` for objects held as plain mappings, and
  `get_controller_of`, which returns the owner reference marked as controller.
- `kubejob.status` – job conditions (`JobStatus`, `JobCondition`,
  `JobConditionType`, `ConditionStatus`) with `update_job_conditions`,
  `is_succeeded` and `is_failed`.
- `kubejob.train` – `is_retryable_exit_code` treats 130, 137, 138 and 143 as
  retryable and every other exit code as permanent.
- `kubejob.util` – `pformat` for indented JSON output of dataclasses, enums
  and plain values, and `rand_string` for lowercase alphanumeric random
  strings.
- `kubejob.logger` – `logger_for_job`, `logger_for_replica`,
  `logger_for_pod`, `logger_for_service`, `logger_for_key` and
  `logger_for_unstructured` return `logging.LoggerAdapter`s that append
  `job=`, `uid=` and similar fields to every message.
- `kubejob.k8sutil` – `get_cluster_config` (from the file named by
  `KUBECONFIG`, or from the in-cluster service account), the API errors
  `ApiError`, `AlreadyExistsError` and `NotFoundError` with
  `is_already_exists_error` / `is_not_found_error`, `cascade_delete_options`,
  `is_pod_active`, `filter_active_pods`, `filter_pod_count`,
  `get_total_replicas` (an unset replica count counts as one) and
  `get_total_failed_replicas`.
- `kubejob.testjob` – the `TestJob` resource (`TestJob`, `TestJobSpec`,
  `TestJobList`, `TestReplicaType`), its `GroupVersion` identity, `resource`
  and `set_defaults_test_job`, which sets the clean-pod policy, replica count,
  restart policy and default container port, and normalises replica type
  names such as `worker` to `Worker`.
- `kubejob.lister` – an in-memory `Indexer` keyed by `namespace/name`
  (`meta_namespace_key`), with `TestJobLister` and `TestJobNamespaceLister`;
  `get` raises `NotFoundError` for a missing job. Selectors are a mapping of
  labels that must match, or a predicate over the labels.
- `kubejob.signals` – `setup_signal_handler` returns a `threading.Event` set
  on the first SIGINT (or SIGTERM outside Windows); a second signal ends the
  process with exit code 1. It may be called only once per process.
- `kubejob.fixtures` – builders for labels, owner references, pods and
  services owned by a `TestJob`, `set_pods_statuses` / `set_services` to fill
  an `Indexer`, `get_key` and `check_condition`.

## Example

```python
from kubejob.status import JobConditionType, JobStatus, update_job_conditions, is_failed
from kubejob.train import is_retryable_exit_code

status = JobStatus()
update_job_conditions(status, JobConditionType.CREATED, "JobCreated", "job created")
update_job_conditions(status, JobConditionType.RUNNING, "JobRunning", "job running")

if not is_retryable_exit_code(139):
    update_job_conditions(status, JobConditionType.FAILED, "JobFailed", "segfault")

assert is_failed(status)
```

Running conditions are set to false when a job fails or succeeds, `Running`
and `Restarting` replace each other rather than accumulating, and once a job
has a true `Failed` condition no further conditions are recorded.

## What it does not do

The package does not talk to an API server. `get_cluster_config` only works
out where the cluster is and returns a `ClusterConfig`; there is no REST
client, watch or informer, and the `Indexer` is a plain in-memory store filled
by the caller.