import os
from typing import Any

import pytest

# Start coverage in subprocesses spawned by CLI tests
if os.getenv("COVERAGE_PROCESS_START"):
    import coverage

    coverage.process_startup()


class RecordingSink:
    """Tree sink that only records the calls it receives."""

    def __init__(self) -> None:
        self.events: list[tuple[Any, ...]] = []
        self.next_handle = 0

    def _handle(self) -> int:
        self.next_handle += 1
        return self.next_handle

    def open_run(self, title: str) -> int:
        self.events.append(("open_run", title))
        return 0

    def add_nonterminal(self, parent: int, label: str) -> int:
        handle = self._handle()
        self.events.append(("add_nonterminal", parent, label, handle))
        return handle

    def add_terminal(self, node: int, lexeme: str) -> None:
        self.events.append(("add_terminal", node, lexeme))

    def add_empty(self, parent: int) -> None:
        self.events.append(("add_empty", parent))

    def report_syntax_error(self, message: str, node: int) -> None:
        self.events.append(("report_syntax_error", message, node))

    def close_run(self) -> None:
        self.events.append(("close_run",))

    def get_output(self) -> str:
        return "\n".join(repr(e) for e in self.events)


@pytest.fixture  # type: ignore[misc]
def recording_sink() -> RecordingSink:
    return RecordingSink()
