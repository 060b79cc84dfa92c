import logging
from typing import List, Optional, Set

from streamsplit.core.common.enums import CodecType
from streamsplit.core.common.errors import CorrelationFailure
from streamsplit.features.stream_catalog.domain.models import StreamCatalog, StreamDescriptor
from ..domain.models import CorrelationResult, VideoPairing

logger = logging.getLogger(__name__)

MARKER_OPEN = "[Video: "
MARKER_CLOSE = "]"


def variant_marker(variant_title: str) -> str:
    """'Director's Cut' -> '[Video: Director's Cut]'"""
    return f"{MARKER_OPEN}{variant_title}{MARKER_CLOSE}"


def references_variant(audio_title: Optional[str], variant_title: str) -> bool:
    """
    True if the audio title embeds the back-reference to this variant.
    Plain substring test on the literal marker; the variant title is never
    interpreted as a pattern.
    """
    if not audio_title:
        return False
    return variant_marker(variant_title) in audio_title


def carries_variant_marker(audio_title: Optional[str]) -> bool:
    """True if the title contains any '[Video: ...]' marker."""
    if not audio_title:
        return False
    start = audio_title.find(MARKER_OPEN)
    if start < 0:
        return False
    return audio_title.find(MARKER_CLOSE, start + len(MARKER_OPEN)) >= 0


class VideoAudioCorrelator:
    """
    Pairs every video stream with its dedicated audio stream.

    - The primary video (first in index order) carries no marker, so it is
      paired by position: its audio sits right after all the video tracks.
    - Every other video is a variant; its audio is the one whose title holds
      '[Video: <variant title>]'.

    Pure function of the catalog: every call starts from an empty claimed set.
    """

    def correlate(self, catalog: StreamCatalog) -> CorrelationResult:
        claimed: Set[int] = set()
        pairings: List[VideoPairing] = []
        failures: List[CorrelationFailure] = []

        videos = catalog.videos
        if not videos:
            logger.info(f"{catalog.source.name}: no video streams, nothing to correlate")
            return CorrelationResult(claimed=frozenset(), pairings=[], failures=[])

        for position, video in enumerate(videos):
            try:
                if position == 0:
                    audio = self._primary_audio(catalog, len(videos), claimed)
                else:
                    audio = self._variant_audio(catalog, video, claimed)
            except CorrelationFailure as failure:
                logger.warning(f"{catalog.source.name}: {failure}; extracting video without audio")
                failures.append(failure)
                pairings.append(VideoPairing(
                    video_index=video.index,
                    audio_index=None,
                    variant_title=video.title,
                    positional=(position == 0)
                ))
                continue

            claimed.add(audio.index)
            pairings.append(VideoPairing(
                video_index=video.index,
                audio_index=audio.index,
                variant_title=video.title,
                positional=(position == 0)
            ))
            logger.info(
                f"{catalog.source.name}: video {video.index} paired with audio {audio.index} "
                f"({audio.language or 'und'}, {'positional' if position == 0 else 'title marker'})"
            )

        logger.info(f"{catalog.source.name}: claimed audio {sorted(claimed)}")
        return CorrelationResult(claimed=frozenset(claimed), pairings=pairings, failures=failures)

    @staticmethod
    def _primary_audio(catalog: StreamCatalog, video_count: int, claimed: Set[int]) -> StreamDescriptor:
        # 1. Conventional layout: audio immediately follows all video tracks
        candidate = catalog.get(video_count)
        if (candidate is not None
                and candidate.codec_type == CodecType.AUDIO
                and candidate.index not in claimed
                and not carries_variant_marker(candidate.title)):
            return candidate

        # 2. Otherwise the first audio that doesn't belong to a variant
        for audio in catalog.audios:
            if audio.index not in claimed and not carries_variant_marker(audio.title):
                logger.info(
                    f"{catalog.source.name}: no unmarked audio at index {video_count}, "
                    f"falling back to first unmarked audio {audio.index}"
                )
                return audio

        primary = catalog.videos[0]
        raise CorrelationFailure(primary.index, primary.title, "no audio stream available for the primary video")

    @staticmethod
    def _variant_audio(catalog: StreamCatalog, video: StreamDescriptor, claimed: Set[int]) -> StreamDescriptor:
        if not video.title:
            raise CorrelationFailure(video.index, None, "variant has no title to correlate on")

        for audio in catalog.audios:
            if audio.index in claimed:
                continue
            if references_variant(audio.title, video.title):
                return audio

        raise CorrelationFailure(
            video.index, video.title, f"no audio stream titled with {variant_marker(video.title)!r}"
        )
