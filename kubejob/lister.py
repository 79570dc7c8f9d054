"""An in-memory object index and listers of TestJobs over it."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Optional, Union

from kubejob.k8sutil import NotFoundError
from kubejob.testjob import TestJob, resource

Selector = Union[Mapping[str, str], Callable[[Mapping[str, str]], bool], None]


def meta_namespace_key(obj: Any) -> str:
    """Key of an object: ``namespace/name``, or just ``name`` without a namespace."""
    metadata = getattr(obj, "metadata", None)
    if metadata is None:
        raise ValueError(f"object has no meta: {obj!r}")
    if metadata.namespace:
        return f"{metadata.namespace}/{metadata.name}"
    return metadata.name


def _matches(selector: Selector, labels: Mapping[str, str]) -> bool:
    if selector is None:
        return True
    if callable(selector):
        return bool(selector(labels))
    return all(labels.get(k) == v for k, v in selector.items())


class Indexer:
    """Store of objects keyed by namespace and name."""

    def __init__(self) -> None:
        self._items: dict[str, Any] = {}

    def add(self, obj: Any) -> None:
        self._items[meta_namespace_key(obj)] = obj

    def get_by_key(self, key: str) -> Optional[Any]:
        return self._items.get(key)

    def list(self) -> list[Any]:
        return list(self._items.values())


class TestJobLister:
    """Lists TestJobs held in an indexer."""

    __test__ = False

    def __init__(self, indexer: Indexer) -> None:
        self.indexer = indexer

    def list(self, selector: Selector = None) -> list[TestJob]:
        return [
            job for job in self.indexer.list() if _matches(selector, job.metadata.labels)
        ]

    def test_jobs(self, namespace: str) -> TestJobNamespaceLister:
        return TestJobNamespaceLister(self.indexer, namespace)


class TestJobNamespaceLister:
    """Lists and gets TestJobs of one namespace."""

    __test__ = False

    def __init__(self, indexer: Indexer, namespace: str) -> None:
        self.indexer = indexer
        self.namespace = namespace

    def list(self, selector: Selector = None) -> list[TestJob]:
        return [
            job
            for job in self.indexer.list()
            if (not self.namespace or job.metadata.namespace == self.namespace)
            and _matches(selector, job.metadata.labels)
        ]

    def get(self, name: str) -> TestJob:
        job = self.indexer.get_by_key(f"{self.namespace}/{name}")
        if job is None:
            raise NotFoundError(resource("testjob"), name)
        return job