"""Normalized task record and its builder."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from typing import Any

from competitive_companion.domain.exceptions import ValidationError


@dataclass(frozen=True)
class TestCase:
    """One sample test: input text and expected output text."""

    __test__ = False

    input: str
    output: str

    def to_dict(self) -> dict[str, str]:
        return {"input": self.input, "output": self.output}


@dataclass(frozen=True)
class Batch:
    """Groups the tasks produced by one contest parse."""

    id: str
    size: int

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "size": self.size}


@dataclass(frozen=True)
class Sendable:
    """Judge-agnostic problem record handed to the receivers."""

    url: str
    name: str
    time_limit_ms: int
    memory_limit_mb: int
    group: str = ""
    interactive: bool = False
    tests: tuple[TestCase, ...] = ()
    batch: Batch | None = None

    def with_batch(self, batch: Batch) -> Sendable:
        return replace(self, batch=batch)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "url": self.url,
            "name": self.name,
            "group": self.group,
            "interactive": self.interactive,
            "timeLimitMs": self.time_limit_ms,
            "memoryLimitMb": self.memory_limit_mb,
            "tests": [test.to_dict() for test in self.tests],
        }
        if self.batch is not None:
            data["batch"] = self.batch.to_dict()
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)


@dataclass
class TaskBuilder:
    """
    Mutable accumulator for a Sendable.

    Setters return the builder so calls can be chained. A builder belongs to
    the parse invocation that created it.
    """

    judge: str = ""
    url: str | None = None
    name: str | None = None
    group: str = ""
    interactive: bool = False
    time_limit_ms: int | None = None
    memory_limit_mb: int | None = None
    tests: list[TestCase] = field(default_factory=list)

    def set_url(self, url: str) -> TaskBuilder:
        self.url = url
        return self

    def set_name(self, name: str) -> TaskBuilder:
        self.name = name.strip()
        return self

    def set_group(self, group: str) -> TaskBuilder:
        self.group = group.strip()
        return self

    def set_category(self, category: str) -> TaskBuilder:
        """Set the group as '<judge> - <category>'."""
        category = category.strip()
        if not category:
            self.group = self.judge
        elif self.judge:
            self.group = f"{self.judge} - {category}"
        else:
            self.group = category
        return self

    def set_interactive(self, interactive: bool) -> TaskBuilder:
        self.interactive = interactive
        return self

    def set_time_limit(self, time_limit_ms: int) -> TaskBuilder:
        self.time_limit_ms = time_limit_ms
        return self

    def set_memory_limit(self, memory_limit_mb: int) -> TaskBuilder:
        self.memory_limit_mb = memory_limit_mb
        return self

    def add_test(self, input: str, output: str) -> TaskBuilder:
        self.tests.append(TestCase(input=input, output=output))
        return self

    def build(self) -> Sendable:
        """Validate required fields and freeze into a Sendable."""
        missing = []
        if not self.url:
            missing.append("url")
        if not self.name:
            missing.append("name")
        if not self.time_limit_ms or self.time_limit_ms <= 0:
            missing.append("time_limit_ms")
        if not self.memory_limit_mb or self.memory_limit_mb <= 0:
            missing.append("memory_limit_mb")

        if missing:
            raise ValidationError(missing)

        return Sendable(
            url=self.url,
            name=self.name,
            group=self.group,
            interactive=self.interactive,
            time_limit_ms=self.time_limit_ms,
            memory_limit_mb=self.memory_limit_mb,
            tests=tuple(self.tests),
        )
