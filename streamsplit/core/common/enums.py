# File: streamsplit/core/common/enums.py

from enum import Enum, unique


@unique
class CodecType(str, Enum):
    VIDEO = "video"
    AUDIO = "audio"
    SUBTITLE = "subtitle"
    OTHER = "other"

    @classmethod
    def from_probe(cls, value: str) -> "CodecType":
        """Maps an ffprobe codec_type ('data', 'attachment', ...) onto the four kinds we care about."""
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.OTHER


@unique
class OutputExtension(str, Enum):
    MP4 = ".mp4"
    AAC = ".aac"
    ASS = ".ass"


@unique
class JobKind(str, Enum):
    VIDEO = "video"
    AUDIO = "audio"
    SUBTITLE = "subtitle"


@unique
class JobStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    SKIPPED = "skipped"


@unique
class RunState(str, Enum):
    """
    Per-file lifecycle. Strictly sequential; FAILED and CLEANED_UP are terminal.
    """
    PROBED = "probed"
    CORRELATED = "correlated"
    PLANNED = "planned"
    EXTRACTED = "extracted"
    CLEANED_UP = "cleaned_up"
    FAILED = "failed"


@unique
class UnknownLanguagePolicy(str, Enum):
    ECHO = "echo"
    EMPTY = "empty"


@unique
class ScanMode(str, Enum):
    SERIES = "series"
    MOVIE = "movie"
    EMPTY = "empty"
