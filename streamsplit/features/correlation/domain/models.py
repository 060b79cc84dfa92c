# File: streamsplit/features/correlation/domain/models.py
from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional

from streamsplit.core.common.errors import CorrelationFailure


@dataclass(frozen=True)
class VideoPairing:
    """
    A video stream and the audio stream that will be muxed with it.
    audio_index is None when no dedicated audio could be found.
    """
    video_index: int
    audio_index: Optional[int] = None
    variant_title: Optional[str] = None
    # True for the primary track (paired by position, not by title marker)
    positional: bool = False

    @property
    def has_audio(self) -> bool:
        return self.audio_index is not None


@dataclass(frozen=True)
class CorrelationResult:
    """
    Output of one correlation pass over one catalog.
    'claimed' holds every audio index consumed by a pairing; the plan builder
    extracts the remaining audio streams on their own.
    """
    claimed: FrozenSet[int] = frozenset()
    pairings: List[VideoPairing] = field(default_factory=list)
    failures: List[CorrelationFailure] = field(default_factory=list)

    @property
    def failed_video_indices(self) -> List[int]:
        return [f.video_index for f in self.failures]
