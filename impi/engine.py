"""
Multi-file verification pipeline.

Three stages run concurrently:

    discovery thread --(paths queue)--> N worker threads --(results queue)--> aggregator

Both queues are bounded (capacity = number of workers), so discovery is held
back by slow workers and workers are held back by a slow reporter. Every
blocking put/get polls a shared cancellation event: the first fatal error
(bad discovery, unreadable file, reporter failure) sets it, all stages drop
what they are doing and the error is re-raised to the caller.

End of stream is signalled with one sentinel per worker on each queue.
"""

from __future__ import annotations

import logging
import os
import threading
from queue import Empty, Full, Queue
from typing import Any, Iterable, List, Optional, Union

from .errors import DiscoveryError, FileCheckError, VerificationFailed
from .paths import FileFilter, expand_package_paths, iter_package_files, read_source
from .schemes import Scheme, resolve_scheme
from .types import ErrorReporter, VerificationError, VerifyOptions
from .verifier import Verifier

logger = logging.getLogger(__name__)

# How often blocked stages look at the cancellation event (seconds)
_POLL_INTERVAL = 0.05

# End-of-stream marker for both queues
_DONE = object()


def default_num_workers() -> int:
    return os.cpu_count() or 1


class Impi:
    """A single instance that can verify import correctness under a set of paths."""

    def __init__(self, num_workers: Optional[int] = None):
        self.num_workers = max(1, num_workers or default_num_workers())

    def verify(
        self,
        root_paths: Union[str, Iterable[str]],
        options: VerifyOptions,
        reporter: ErrorReporter,
    ) -> None:
        """
        Verify all Go files under root_paths (go tool package semantics, e.g. ./...).

        Each failing file is handed to reporter.report() exactly once, as soon
        as it is found; delivery order across files is not defined.

        Raises:
            SetupError: unknown scheme or invalid pattern (nothing was verified)
            DiscoveryError: a root path expanded to no packages
            OSError: a file could not be read
            VerificationFailed: at least one file failed verification
        """
        if isinstance(root_paths, str):
            root_paths = [root_paths]

        # resolved once, then shared read-only by all workers
        scheme = resolve_scheme(options.scheme)
        file_filter = FileFilter.from_options(options)

        run = _PipelineRun(self.num_workers, scheme, options, file_filter, reporter)
        failures = run.execute(list(root_paths))

        if failures:
            raise VerificationFailed(failures)


class _PipelineRun:
    """State of one Impi.verify() call."""

    def __init__(
        self,
        num_workers: int,
        scheme: Scheme,
        options: VerifyOptions,
        file_filter: FileFilter,
        reporter: ErrorReporter,
    ):
        self.num_workers = num_workers
        self.scheme = scheme
        self.options = options
        self.file_filter = file_filter
        self.reporter = reporter

        self._cancel = threading.Event()
        self._paths: Queue[Any] = Queue(maxsize=num_workers)
        self._results: Queue[Any] = Queue(maxsize=num_workers)
        self._error_lock = threading.Lock()
        self._first_error: Optional[BaseException] = None

    def execute(self, root_paths: List[str]) -> int:
        """Run all stages to completion; return the number of failed files."""
        threads = [
            threading.Thread(target=self._discover, args=(root_paths,), name="impi-discovery", daemon=True)
        ]
        threads += [
            threading.Thread(target=self._work, name=f"impi-worker-{idx}", daemon=True)
            for idx in range(self.num_workers)
        ]
        for t in threads:
            t.start()

        failures = 0
        try:
            failures = self._aggregate()
        except Exception as e:
            # reporter blew up: that is fatal for the whole run
            self._fail(e)
        except BaseException:
            self._cancel.set()
            raise
        finally:
            for t in threads:
                t.join()

        if self._first_error is not None:
            raise self._first_error

        return failures

    # ---- Stages ----

    def _discover(self, root_paths: List[str]) -> None:
        discovered = 0
        try:
            for root_path in root_paths:
                package_paths = expand_package_paths(root_path)
                if not package_paths:
                    raise DiscoveryError(f"Could not find packages in {root_path}")

                for package_path in package_paths:
                    for file_path in iter_package_files(package_path):
                        if not self.file_filter.accepts(file_path):
                            continue
                        if not self._put(self._paths, file_path):
                            return
                        discovered += 1
        except Exception as e:
            self._fail(e)
            return

        logger.debug("discovered %d file(s) under %s", discovered, ", ".join(root_paths))

        # close the path queue for every worker
        for _ in range(self.num_workers):
            if not self._put(self._paths, _DONE):
                return

    def _work(self) -> None:
        verifier = Verifier(self.scheme, self.options)
        verified = 0

        while True:
            item = self._get(self._paths)
            if item is None:
                logger.debug("%s cancelled", threading.current_thread().name)
                return
            if item is _DONE:
                break

            try:
                result = self._verify_file(verifier, item)
            except Exception as e:
                self._fail(e)
                return
            verified += 1

            if result is not None and not self._put(self._results, result):
                return

        logger.debug("%s done, %d file(s) verified", threading.current_thread().name, verified)
        self._put(self._results, _DONE)

    def _aggregate(self) -> int:
        failures = 0
        finished_workers = 0

        while finished_workers < self.num_workers:
            item = self._get(self._results)
            if item is None:
                # cancelled, whatever is still queued is dropped
                break
            if item is _DONE:
                finished_workers += 1
                continue

            self.reporter.report(item)
            failures += 1

        return failures

    @staticmethod
    def _verify_file(verifier: Verifier, file_path: str) -> Optional[VerificationError]:
        # OSError propagates: an unreadable file aborts the run
        source = read_source(file_path)
        try:
            verifier.verify(source)
        except FileCheckError as e:
            logger.debug("%s: failed verification", file_path)
            return VerificationError(file_path=file_path, message=str(e))
        return None

    # ---- Cancellation-aware queue access ----

    def _put(self, queue: Queue[Any], item: Any) -> bool:
        while not self._cancel.is_set():
            try:
                queue.put(item, timeout=_POLL_INTERVAL)
                return True
            except Full:
                continue
        return False

    def _get(self, queue: Queue[Any]) -> Any:
        while not self._cancel.is_set():
            try:
                return queue.get(timeout=_POLL_INTERVAL)
            except Empty:
                continue
        return None

    def _fail(self, error: BaseException) -> None:
        with self._error_lock:
            if self._first_error is None:
                self._first_error = error
                logger.debug("cancelling run: %s", error)
        self._cancel.set()


def run_verify(
    root_paths: Union[str, Iterable[str]],
    options: VerifyOptions,
    reporter: ErrorReporter,
    num_workers: Optional[int] = None,
) -> None:
    Impi(num_workers).verify(root_paths, options, reporter)


__all__ = ["Impi", "run_verify", "default_num_workers"]
