# File: streamsplit/core/common/errors.py

from typing import Optional


class StreamsplitError(Exception):
    """Base error for the streamsplit demuxer."""


class MalformedMetadata(StreamsplitError, ValueError):
    """Raised when probe output cannot be read as a list of stream records."""


class ProbeError(StreamsplitError, RuntimeError):
    """Raised when ffprobe is missing or exits with an error."""


class CorrelationFailure(StreamsplitError):
    """
    A video stream whose dedicated audio track could not be found.
    Recorded on the correlation result; the video is still extracted, without audio.
    """

    def __init__(self, video_index: int, variant_title: Optional[str], reason: str):
        self.video_index = video_index
        self.variant_title = variant_title
        self.reason = reason
        super().__init__(f"Video stream {video_index} ({variant_title or 'untitled'}): {reason}")

    # Compared by value so two plans of the same catalog are equal
    def __eq__(self, other):
        if not isinstance(other, CorrelationFailure):
            return NotImplemented
        return (self.video_index, self.variant_title, self.reason) == \
            (other.video_index, other.variant_title, other.reason)

    def __hash__(self):
        return hash((self.video_index, self.variant_title, self.reason))

    def to_dict(self) -> dict:
        return {"video_index": self.video_index, "variant_title": self.variant_title, "reason": self.reason}


class UnknownLanguageTag(StreamsplitError, KeyError):
    """Raised by the strict suffix lookup for tags missing from the table."""

    def __init__(self, tag: str):
        self.tag = tag
        super().__init__(tag)

    def __str__(self) -> str:
        return f"Unknown language tag: {self.tag!r}"


class ExtractionError(StreamsplitError, RuntimeError):
    """Raised when ffmpeg fails to copy the streams of one job."""


class PlanInvariantError(StreamsplitError, AssertionError):
    """Raised when a plan would extract an audio stream twice or drop one."""
