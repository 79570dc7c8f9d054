from kubejob.status import (
    ConditionStatus,
    JobCondition,
    JobConditionType,
    JobStatus,
    is_failed,
    is_succeeded,
    update_job_conditions,
)


def test_is_succeeded():
    status = JobStatus(
        conditions=[JobCondition(JobConditionType.SUCCEEDED, ConditionStatus.TRUE)]
    )
    assert is_succeeded(status)
    assert not is_failed(status)


def test_is_failed():
    status = JobStatus(
        conditions=[JobCondition(JobConditionType.FAILED, ConditionStatus.TRUE)]
    )
    assert is_failed(status)


def test_false_condition_does_not_count():
    status = JobStatus(
        conditions=[JobCondition(JobConditionType.FAILED, ConditionStatus.FALSE)]
    )
    assert not is_failed(status)


def _check(cond, ctype, reason, message):
    assert cond.type == ctype
    assert cond.reason == reason
    assert cond.message == message


def test_update_job_conditions():
    status = JobStatus()

    update_job_conditions(status, JobConditionType.CREATED, "Job Created", "Job Created")
    _check(status.conditions[0], JobConditionType.CREATED, "Job Created", "Job Created")

    update_job_conditions(status, JobConditionType.RUNNING, "Job Running", "Job Running")
    _check(status.conditions[1], JobConditionType.RUNNING, "Job Running", "Job Running")

    update_job_conditions(
        status, JobConditionType.RESTARTING, "Job Restarting", "Job Restarting"
    )
    _check(
        status.conditions[1],
        JobConditionType.RESTARTING,
        "Job Restarting",
        "Job Restarting",
    )

    update_job_conditions(status, JobConditionType.RUNNING, "Job Running", "Job Running")
    _check(status.conditions[1], JobConditionType.RUNNING, "Job Running", "Job Running")

    update_job_conditions(status, JobConditionType.FAILED, "Job Failed", "Job Failed")
    assert status.conditions[1].type == JobConditionType.RUNNING
    assert status.conditions[1].status == ConditionStatus.FALSE
    _check(status.conditions[2], JobConditionType.FAILED, "Job Failed", "Job Failed")


def test_no_updates_after_failure():
    status = JobStatus()
    update_job_conditions(status, JobConditionType.FAILED, "Job Failed", "Job Failed")
    update_job_conditions(status, JobConditionType.RUNNING, "Job Running", "Job Running")
    assert [c.type for c in status.conditions] == [JobConditionType.FAILED]


def test_same_reason_keeps_existing_condition():
    status = JobStatus()
    update_job_conditions(status, JobConditionType.RUNNING, "Job Running", "first")
    first = status.conditions[0]
    update_job_conditions(status, JobConditionType.RUNNING, "Job Running", "second")
    assert status.conditions == [first]
    assert status.conditions[0].message == "first"


def test_new_reason_preserves_transition_time():
    status = JobStatus()
    update_job_conditions(status, JobConditionType.RUNNING, "Job Running", "m")
    original = status.conditions[0].last_transition_time
    update_job_conditions(status, JobConditionType.RUNNING, "Other", "m")
    assert len(status.conditions) == 1
    assert status.conditions[0].reason == "Other"
    assert status.conditions[0].last_transition_time == original


def test_success_sets_running_false_without_mutating_old_condition():
    status = JobStatus()
    update_job_conditions(status, JobConditionType.RUNNING, "Job Running", "m")
    running = status.conditions[0]
    update_job_conditions(status, JobConditionType.SUCCEEDED, "Job Succeeded", "m")
    assert running.status == ConditionStatus.TRUE
    assert status.conditions[0].status == ConditionStatus.FALSE
    assert is_succeeded(status)