import logging
from pathlib import Path
from typing import AbstractSet, List, Optional, Tuple

from streamsplit.core.common.enums import JobKind, OutputExtension
from streamsplit.core.common.errors import PlanInvariantError
from streamsplit.features.correlation.domain.models import CorrelationResult, VideoPairing
from streamsplit.features.correlation.service.correlator import VideoAudioCorrelator
from streamsplit.features.language_suffix.service.resolver import LanguageSuffixResolver, normalize_tag
from streamsplit.features.stream_catalog.domain.models import StreamCatalog
from streamsplit.features.subtitles.service.classifier import SubtitleClassifier, is_caption_track
from ..domain.models import DemuxJob, DemuxPlan

logger = logging.getLogger(__name__)


class DemuxPlanBuilder:
    """
    Assembles the extraction plan of one file.

    Every audio stream ends up in exactly one job: either muxed with the
    video it was claimed by, or extracted on its own as a language dub.
    """

    def __init__(self,
                 resolver: LanguageSuffixResolver,
                 correlator: Optional[VideoAudioCorrelator] = None,
                 classifier: Optional[SubtitleClassifier] = None,
                 output_dir: Optional[Path] = None):
        self.resolver = resolver
        self.correlator = correlator or VideoAudioCorrelator()
        self.classifier = classifier or SubtitleClassifier(resolver)
        self.output_dir = output_dir

    @staticmethod
    def standalone_audio(catalog: StreamCatalog, claimed: AbstractSet[int]) -> List[int]:
        """All audio indices minus the claimed ones, ascending."""
        return sorted(set(catalog.audio_indices) - set(claimed))

    def build(self, catalog: StreamCatalog, correlation: CorrelationResult = None) -> DemuxPlan:
        """
        Builds the plan. A correlation result may be passed in when the caller
        already ran the correlator (the batch records it as its own step).
        """
        if correlation is None:
            correlation = self.correlator.correlate(catalog)

        # 1. Video jobs (.mp4)
        video_jobs = [self._video_job(catalog, p) for p in correlation.pairings]

        # 2. Standalone audio jobs (.aac)
        standalone = self.standalone_audio(catalog, correlation.claimed)
        audio_jobs = [self._audio_job(catalog, index) for index in standalone]
        logger.info(f"{catalog.source.name}: standalone audio {standalone}")

        # 3. Subtitle jobs (.ass)
        subtitle_jobs = self.classifier.jobs(catalog, self.output_dir)

        plan = DemuxPlan(
            source_file=catalog.source,
            jobs=tuple(video_jobs + audio_jobs + subtitle_jobs),
            claimed_audio=correlation.claimed,
            standalone_audio=tuple(standalone),
            correlation_failures=tuple(correlation.failures),
            fallback_languages=self._fallback_languages(catalog)
        )

        self._check_partition(catalog, plan)
        for path, jobs in plan.colliding_outputs().items():
            logger.warning(
                f"{catalog.source.name}: {len(jobs)} jobs write {path.name}: "
                f"{', '.join(j.describe() for j in jobs)}"
            )

        logger.info(
            f"{catalog.source.name}: planned {len(video_jobs)} video, "
            f"{len(audio_jobs)} audio, {len(subtitle_jobs)} subtitle jobs"
        )
        return plan

    def _video_job(self, catalog: StreamCatalog, pairing: VideoPairing) -> DemuxJob:
        if pairing.has_audio:
            audio = catalog.get(pairing.audio_index)
            suffix = self.resolver.resolve(audio.language)
            indices: Tuple[int, ...] = (pairing.video_index, pairing.audio_index)
        else:
            # Keeps an audio-less variant from overwriting the primary output
            suffix = f".v{pairing.video_index}"
            indices = (pairing.video_index,)

        return DemuxJob(
            source_file=catalog.source,
            stream_indices=indices,
            output_suffix=suffix,
            output_extension=OutputExtension.MP4,
            kind=JobKind.VIDEO,
            output_dir=self.output_dir
        )

    def _audio_job(self, catalog: StreamCatalog, index: int) -> DemuxJob:
        audio = catalog.get(index)
        return DemuxJob(
            source_file=catalog.source,
            stream_indices=(index,),
            output_suffix=self.resolver.resolve(audio.language),
            output_extension=OutputExtension.AAC,
            kind=JobKind.AUDIO,
            output_dir=self.output_dir
        )

    def _fallback_languages(self, catalog: StreamCatalog) -> Tuple[str, ...]:
        tags = {
            normalize_tag(s.language)
            for s in catalog.audios + [t for t in catalog.subtitles if is_caption_track(t.title)]
            if not self.resolver.is_known(s.language)
        }
        return tuple(sorted(tags))

    @staticmethod
    def _check_partition(catalog: StreamCatalog, plan: DemuxPlan) -> None:
        counts = plan.audio_partition()
        duplicated = sorted(i for i, n in counts.items() if n > 1)
        missing = sorted(set(catalog.audio_indices) - set(counts))
        if duplicated or missing:
            raise PlanInvariantError(
                f"{catalog.source.name}: audio partition broken "
                f"(duplicated={duplicated}, missing={missing})"
            )
