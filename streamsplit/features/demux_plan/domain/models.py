# File: streamsplit/features/demux_plan/domain/models.py
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, FrozenSet, List, Optional, Tuple

from streamsplit.core.common.enums import JobKind, OutputExtension
from streamsplit.core.common.errors import CorrelationFailure
from streamsplit.core.shared_types import MediaFile


@dataclass(frozen=True)
class DemuxJob:
    """
    One output file: which stream indices to copy, and where to.
    The video index always comes first when present.
    """
    source_file: Path
    stream_indices: Tuple[int, ...]
    output_suffix: str
    output_extension: OutputExtension
    kind: JobKind
    # Writes next to the source when None
    output_dir: Optional[Path] = None

    def __post_init__(self):
        if not self.stream_indices:
            raise ValueError("A demux job needs at least one stream index.")

    @property
    def output_path(self) -> Path:
        target = MediaFile(self.source_file).with_suffix_name(self.output_suffix, self.output_extension.value)
        if self.output_dir is not None:
            return self.output_dir / target.name
        return target

    @property
    def audio_indices(self) -> Tuple[int, ...]:
        """Audio streams carried by this job (video jobs carry theirs second)."""
        if self.kind == JobKind.AUDIO:
            return self.stream_indices
        if self.kind == JobKind.VIDEO:
            return self.stream_indices[1:]
        return ()

    def describe(self) -> str:
        maps = " + ".join(str(i) for i in self.stream_indices)
        return f"[{self.kind.value}] {maps} -> {self.output_path.name}"


@dataclass(frozen=True)
class DemuxPlan:
    """
    The ordered extraction plan for one source file.
    Video jobs first, then standalone audio, then subtitles; each by index.
    """
    source_file: Path
    jobs: Tuple[DemuxJob, ...] = field(default_factory=tuple)
    claimed_audio: FrozenSet[int] = frozenset()
    standalone_audio: Tuple[int, ...] = field(default_factory=tuple)
    correlation_failures: Tuple[CorrelationFailure, ...] = field(default_factory=tuple)
    # Language tags that were resolved through the unknown-tag fallback
    fallback_languages: Tuple[str, ...] = field(default_factory=tuple)

    def of_kind(self, kind: JobKind) -> List[DemuxJob]:
        return [j for j in self.jobs if j.kind == kind]

    @property
    def video_jobs(self) -> List[DemuxJob]:
        return self.of_kind(JobKind.VIDEO)

    @property
    def audio_jobs(self) -> List[DemuxJob]:
        return self.of_kind(JobKind.AUDIO)

    @property
    def subtitle_jobs(self) -> List[DemuxJob]:
        return self.of_kind(JobKind.SUBTITLE)

    def audio_partition(self) -> Dict[int, int]:
        """
        audio index -> number of jobs carrying it.
        Every value is 1 in a valid plan.
        """
        counts: Dict[int, int] = {}
        for job in self.jobs:
            for index in job.audio_indices:
                counts[index] = counts.get(index, 0) + 1
        return counts

    def colliding_outputs(self) -> Dict[Path, List[DemuxJob]]:
        by_path: Dict[Path, List[DemuxJob]] = {}
        for job in self.jobs:
            by_path.setdefault(job.output_path, []).append(job)
        return {path: jobs for path, jobs in by_path.items() if len(jobs) > 1}
