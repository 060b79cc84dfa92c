# File: streamsplit/features/stream_catalog/domain/models.py
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from streamsplit.core.common.enums import CodecType


@dataclass(frozen=True)
class StreamDescriptor:
    """
    One elementary track of a container, as declared by the prober.
    """
    index: int
    codec_type: CodecType
    language: Optional[str] = None
    title: Optional[str] = None

    def __post_init__(self):
        if self.index < 0:
            raise ValueError(f"Stream index cannot be negative: {self.index}")


@dataclass(frozen=True)
class StreamCatalog:
    """
    Ordered, read-only view over the streams of exactly one source file.
    Rebuilt for every file; never mutated.
    """
    source: Path
    streams: Tuple[StreamDescriptor, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # Normalise to declaration order so every consumer sees ascending indices
        ordered = tuple(sorted(self.streams, key=lambda s: s.index))
        object.__setattr__(self, "streams", ordered)

    def of_type(self, codec_type: CodecType) -> List[StreamDescriptor]:
        return [s for s in self.streams if s.codec_type == codec_type]

    @property
    def videos(self) -> List[StreamDescriptor]:
        return self.of_type(CodecType.VIDEO)

    @property
    def audios(self) -> List[StreamDescriptor]:
        return self.of_type(CodecType.AUDIO)

    @property
    def subtitles(self) -> List[StreamDescriptor]:
        return self.of_type(CodecType.SUBTITLE)

    @property
    def audio_indices(self) -> List[int]:
        return [s.index for s in self.audios]

    def get(self, index: int) -> Optional[StreamDescriptor]:
        for stream in self.streams:
            if stream.index == index:
                return stream
        return None

    def __len__(self) -> int:
        return len(self.streams)
