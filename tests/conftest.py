"""Shared fixtures: a deterministic runtime provider and a recording sink."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from diagsnap.core.contracts.snapshot import (
    BuildSnapshot,
    GCSnapshot,
    MemorySnapshot,
    RuntimeSnapshot,
)
from diagsnap.sinks import RecordingSink

CAPTURED_AT = datetime(2024, 5, 1, 12, 0, 0, tzinfo=UTC)


class FakeRuntimeStats:
    """Provider returning a fixed snapshot and counting how often it was asked."""

    def __init__(self, *, build: bool = True, stack_fields: bool = True) -> None:
        self.calls = 0
        self.build = build
        self.stack_fields = stack_fields

    def snapshot(self) -> RuntimeSnapshot:
        self.calls += 1
        return RuntimeSnapshot(
            captured_at=CAPTURED_AT,
            stack='  File "app.py", line 10, in main\n    checkpoint()',
            memory=MemorySnapshot(
                alloc=1024,
                total_alloc=4096,
                heap_alloc=2048,
                heap_sys=8192,
                heap_idle=4096,
                heap_inuse=4096,
                heap_released=0,
                heap_objects=42 + self.calls,
                stack_inuse=512 if self.stack_fields else None,
                stack_sys=8388608 if self.stack_fields else None,
                num_gc=7,
            ),
            gc=GCSnapshot(
                last_gc=CAPTURED_AT - timedelta(seconds=1),
                num_gc=7,
                pause_total=timedelta(milliseconds=3),
                pause=timedelta(microseconds=1500),
                pause_end=(CAPTURED_AT - timedelta(seconds=1),),
                pause_quantiles=(timedelta(microseconds=500),) * 5,
            ),
            build=(
                BuildSnapshot(
                    distribution="hostapp",
                    version="1.2.3",
                    requires=("rich>=13",),
                    python_implementation="CPython",
                    python_version="3.12.1",
                    executable="/usr/bin/python3",
                    platform="Linux",
                )
                if self.build
                else None
            ),
        )


@pytest.fixture
def provider() -> FakeRuntimeStats:
    """Deterministic provider with build metadata available."""
    return FakeRuntimeStats()


@pytest.fixture
def sink() -> RecordingSink:
    """Fresh in-memory sink."""
    return RecordingSink()


@pytest.fixture
def provider_factory() -> type[FakeRuntimeStats]:
    """The fake provider class, for tests that need non-default variants."""
    return FakeRuntimeStats
