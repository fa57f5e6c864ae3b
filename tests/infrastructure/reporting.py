"""
In-memory reporters for engine tests.
"""

from __future__ import annotations

import threading
from typing import Dict, List

from impi.types import VerificationError


class CollectingReporter:
    """Keeps every reported error; safe to inspect after verify() returns."""

    def __init__(self):
        self.errors: List[VerificationError] = []
        self.threads: set[str] = set()

    def report(self, error: VerificationError) -> None:
        self.threads.add(threading.current_thread().name)
        self.errors.append(error)

    def by_path(self) -> Dict[str, str]:
        return {e.file_path: e.message for e in self.errors}


class ExplodingReporter:
    """Fails on the first report."""

    def __init__(self, exc: Exception | None = None):
        self.exc = exc or RuntimeError("reporter is broken")
        self.calls = 0

    def report(self, error: VerificationError) -> None:
        self.calls += 1
        raise self.exc
