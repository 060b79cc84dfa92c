import logging
from pathlib import Path
from typing import List, Optional

from streamsplit.core.common.enums import JobKind, OutputExtension
from streamsplit.features.demux_plan.domain.models import DemuxJob
from streamsplit.features.language_suffix.service.resolver import LanguageSuffixResolver, normalize_tag
from streamsplit.features.stream_catalog.domain.models import StreamCatalog, StreamDescriptor
from ..domain.models import CAPTION_MARKER, CAPTION_SUFFIX, SubtitleClassification

logger = logging.getLogger(__name__)


def is_caption_track(title: Optional[str]) -> bool:
    """Case-sensitive substring test for '(CC)'."""
    return bool(title) and CAPTION_MARKER in title


class SubtitleClassifier:
    """
    Splits subtitle tracks into caption-style and standard ones.

    caption:  <dub suffix>.<lang>   e.g. '.dub.en'
              .<lang>.cc            when the dub suffix is empty, e.g. '.ja-JP.cc'
    standard: .<lang>               e.g. '.en'
    """

    def __init__(self, resolver: LanguageSuffixResolver):
        self.resolver = resolver

    def classify_stream(self, stream: StreamDescriptor) -> SubtitleClassification:
        language = normalize_tag(stream.language)
        caption = is_caption_track(stream.title)

        if caption:
            dub_suffix = self.resolver.resolve(language)
            # An empty dub suffix (original language, empty fallback) would reuse the standard name
            suffix = f"{dub_suffix}.{language}" if dub_suffix else f".{language}{CAPTION_SUFFIX}"
        else:
            suffix = f".{language}"

        return SubtitleClassification(
            stream_index=stream.index,
            language=language,
            caption=caption,
            output_suffix=suffix
        )

    def classify(self, catalog: StreamCatalog) -> List[SubtitleClassification]:
        results = [self.classify_stream(s) for s in catalog.subtitles]
        captions = [r.stream_index for r in results if r.caption]
        if captions:
            logger.info(f"{catalog.source.name}: caption-style subtitles {captions}")
        return results

    def jobs(self, catalog: StreamCatalog, output_dir: Path = None) -> List[DemuxJob]:
        return [
            DemuxJob(
                source_file=catalog.source,
                stream_indices=(c.stream_index,),
                output_suffix=c.output_suffix,
                output_extension=OutputExtension.ASS,
                kind=JobKind.SUBTITLE,
                output_dir=output_dir
            )
            for c in self.classify(catalog)
        ]
