from __future__ import annotations

from typing import Sequence

import pytest

from macshift.core.errors import CommandFailed


class RecordingRunner:
    """Command runner stub that records calls and optionally fails."""

    def __init__(self, fail: bool = False, output: str = "") -> None:
        self.fail = fail
        self.output = output
        self.calls: list[tuple[str, list[str]]] = []

    def __call__(self, command: str, args: Sequence[str]) -> str:
        self.calls.append((command, list(args)))
        if self.fail:
            raise CommandFailed(command, args, 255, "SIOCSIFHWADDR: Operation not permitted")
        return self.output


@pytest.fixture
def runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture
def failing_runner() -> RecordingRunner:
    return RecordingRunner(fail=True)
