"""Loggers carrying the job, pod or service they report on."""

from __future__ import annotations

import logging
from typing import Any, MutableMapping

from kubejob.meta import Pod, Service, Unstructured, get_controller_of

_base = logging.getLogger("kubejob")


class FieldLogger(logging.LoggerAdapter):
    """Logger adapter that appends its fields, sorted, to every message."""

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        fields = " ".join(f"{k}={v}" for k, v in sorted(self.extra.items()))
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return (f"{msg} {fields}" if fields else msg), kwargs


def _with_fields(fields: dict[str, Any]) -> FieldLogger:
    return FieldLogger(_base, fields)


def logger_for_replica(job: Any, rtype: str) -> FieldLogger:
    meta = job.metadata
    return _with_fields(
        {
            "job": f"{meta.namespace}.{meta.name}",
            "uid": meta.uid,
            "replica-type": rtype,
        }
    )


def logger_for_job(job: Any) -> FieldLogger:
    meta = job.metadata
    return _with_fields({"job": f"{meta.namespace}.{meta.name}", "uid": meta.uid})


def _owner_job(obj: Pod | Service, kind: str) -> str:
    ref = get_controller_of(obj)
    if ref is not None and ref.kind == kind:
        return f"{obj.metadata.namespace}.{ref.name}"
    return ""


def logger_for_pod(pod: Pod, kind: str) -> FieldLogger:
    return _with_fields(
        {
            "job": _owner_job(pod, kind),
            "pod": f"{pod.metadata.namespace}.{pod.metadata.name}",
            "uid": pod.metadata.uid,
        }
    )


def logger_for_service(svc: Service, kind: str) -> FieldLogger:
    return _with_fields(
        {
            "job": _owner_job(svc, kind),
            "service": f"{svc.metadata.namespace}.{svc.metadata.name}",
            "uid": svc.metadata.uid,
        }
    )


def logger_for_key(key: str) -> FieldLogger:
    """Logger for a work-queue key of the form namespace/name."""
    return _with_fields({"job": key.replace("/", ".")})


def logger_for_unstructured(obj: Unstructured, kind: str) -> FieldLogger:
    job = f"{obj.namespace()}.{obj.name()}" if obj.kind() == kind else ""
    return _with_fields({"job": job, "uid": obj.uid()})