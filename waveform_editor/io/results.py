"""Result variants returned by file loading and saving."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple, Union

from ..constants import SeriesConstants
from ..core.sample_series import Sample


@dataclass(frozen=True)
class Success:
    """File parsed completely."""

    samples: Tuple[Sample, ...]


@dataclass(frozen=True)
class FileIsTooBig:
    """File had more samples than allowed; only the first part was kept."""

    samples: Tuple[Sample, ...]
    max_points: int = SeriesConstants.MAX_POINTS


@dataclass(frozen=True)
class NotEnoughPoints:
    """File had fewer samples than required."""

    min_points: int = SeriesConstants.MIN_POINTS


@dataclass(frozen=True)
class InvalidFile:
    """A line was malformed or out of range; the whole file is rejected."""

    line_number: int = 0
    reason: str = ""


@dataclass(frozen=True)
class UnknownError:
    """Reading failed for a reason other than the file contents."""

    message: str = ""


LoadResult = Union[Success, FileIsTooBig, NotEnoughPoints, InvalidFile, UnknownError]


@dataclass(frozen=True)
class SaveSuccess:
    """Samples written to a file."""

    path: Path


@dataclass(frozen=True)
class SaveError:
    """Samples could not be written."""

    message: str = field(default="")


SaveResult = Union[SaveSuccess, SaveError]
