"""Sample file reading, writing and background tasks."""

from .file_io import read_samples, save_selection, write_samples
from .task_runner import FileTaskRunner, TaskKind, TaskResult

__all__ = [
    "read_samples",
    "save_selection",
    "write_samples",
    "FileTaskRunner",
    "TaskKind",
    "TaskResult",
]
