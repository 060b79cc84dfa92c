# File: streamsplit/features/language_suffix/domain/models.py
from types import MappingProxyType
from typing import Mapping

# Tag used when a stream carries no language at all (ffprobe's own convention)
UNDETERMINED_LANGUAGE = "und"

# Output filename suffix per audio language.
# The original-language track (Japanese) gets no suffix; dubs are marked.
_REGIONAL_SUFFIXES = {
    "ar-ME": ".me-dub",
    "ar-SA": ".sa-dub",
    "de-DE": ".de-dub",
    "en-IN": ".in-dub",
    "en-US": ".dub",
    "es-419": ".419-dub",
    "es-ES": ".es-dub",
    "es-LA": ".la-dub",
    "fr-FR": ".vf",
    "hi-IN": ".hi-dub",
    "it-IT": ".it-dub",
    "ja-JP": "",
    "pt-BR": ".br-dub",
    "pt-PT": ".pt-dub",
    "ru-RU": ".ru-dub",
    "zh-CN": ".zh-dub",
}

# Subtitle tracks are frequently tagged without a region ("en", "fr").
# Each bare tag points at the region the catalogue ships most often.
_PRIMARY_SUFFIXES = {
    "ar": ".sa-dub",
    "de": ".de-dub",
    "en": ".dub",
    "es": ".419-dub",
    "fr": ".vf",
    "hi": ".hi-dub",
    "it": ".it-dub",
    "ja": "",
    "pt": ".br-dub",
    "ru": ".ru-dub",
    "zh": ".zh-dub",
}

DEFAULT_SUFFIX_TABLE: Mapping[str, str] = MappingProxyType({**_REGIONAL_SUFFIXES, **_PRIMARY_SUFFIXES})


def freeze_table(table: Mapping[str, str]) -> Mapping[str, str]:
    """Returns a read-only copy so callers can't mutate a resolver's table afterwards."""
    return MappingProxyType(dict(table))
