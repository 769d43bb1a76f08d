"""Background runner for file loading and saving.

File operations run on worker threads so the UI stays responsive. Each
task posts exactly one result to a queue which the UI drains from its
own thread.
"""

import queue
import threading
import traceback
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Union

from ..core.sample_series import Sample
from . import file_io
from .results import LoadResult, SaveError, SaveResult, UnknownError


class TaskKind(Enum):
    """Type of a background file task."""

    LOAD = "load"
    SAVE = "save"


@dataclass(frozen=True)
class TaskResult:
    """Terminal result of a background task.

    Attributes:
        kind: Task type
        generation: Number assigned when the task was submitted
        result: Load or save result
    """

    kind: TaskKind
    generation: int
    result: Union[LoadResult, SaveResult]


class FileTaskRunner:
    """Runs file tasks on daemon threads and collects their results.

    Loads are numbered with a monotonically increasing generation. When
    results are polled, a load result older than the most recently
    submitted load is dropped, so a slow stale load cannot replace the
    series of a newer one.
    """

    def __init__(
        self,
        loader: Callable[[Path], LoadResult] = file_io.read_samples,
        saver: Callable[[Path, Sequence[Sample]], SaveResult] = file_io.save_selection,
        debug: bool = False,
    ):
        """Initialize the runner.

        Args:
            loader: Function loading a sample file
            saver: Function saving samples into a directory
            debug: Enable debug output
        """
        self._loader = loader
        self._saver = saver
        self.debug = debug

        self._results: "queue.Queue[TaskResult]" = queue.Queue()
        self._lock = threading.Lock()
        self._generation = 0
        self._latest_load = 0
        self._threads: List[threading.Thread] = []

    @property
    def latest_load_generation(self) -> int:
        """Get the generation of the most recently submitted load."""
        with self._lock:
            return self._latest_load

    def submit_load(self, path: Path) -> int:
        """Start loading a sample file.

        Args:
            path: Sample file path

        Returns:
            Generation number of the task
        """
        generation = self._next_generation(is_load=True)
        self._start(TaskKind.LOAD, generation, self._loader, Path(path))
        return generation

    def submit_save(self, directory: Path, samples: Sequence[Sample]) -> int:
        """Start saving samples into a directory.

        Args:
            directory: Export directory
            samples: Samples to write

        Returns:
            Generation number of the task
        """
        generation = self._next_generation(is_load=False)
        self._start(
            TaskKind.SAVE, generation, self._saver, Path(directory), tuple(samples)
        )
        return generation

    def poll(self) -> List[TaskResult]:
        """Collect finished results, dropping stale loads.

        Returns:
            Results in completion order
        """
        collected = []
        while True:
            try:
                item = self._results.get_nowait()
            except queue.Empty:
                break

            if item.kind is TaskKind.LOAD and item.generation < self.latest_load_generation:
                if self.debug:
                    print(f"[FileTaskRunner] Dropping stale load #{item.generation}")
                continue
            collected.append(item)

        self._threads = [t for t in self._threads if t.is_alive()]
        return collected

    def shutdown(self, timeout: Optional[float] = 1.0) -> None:
        """Wait for running tasks to finish.

        Args:
            timeout: Maximum wait per task in seconds
        """
        for thread in self._threads:
            if thread.is_alive():
                thread.join(timeout=timeout)
        self._threads = [t for t in self._threads if t.is_alive()]

    def _next_generation(self, is_load: bool) -> int:
        with self._lock:
            self._generation += 1
            if is_load:
                self._latest_load = self._generation
            return self._generation

    def _start(self, kind: TaskKind, generation: int, func, *args) -> None:
        thread = threading.Thread(
            target=self._run, args=(kind, generation, func, args), daemon=True
        )
        self._threads.append(thread)
        if self.debug:
            print(f"[FileTaskRunner] Starting {kind.value} #{generation}")
        thread.start()

    def _run(self, kind: TaskKind, generation: int, func, args) -> None:
        """Worker body: run the task and post its single result."""
        try:
            result = func(*args)
        except Exception as e:
            if self.debug:
                traceback.print_exc()
            result = UnknownError(str(e)) if kind is TaskKind.LOAD else SaveError(str(e))
        self._results.put(TaskResult(kind, generation, result))
