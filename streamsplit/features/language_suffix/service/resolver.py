import logging
from typing import Mapping, Optional, Union

from streamsplit.core.common.enums import UnknownLanguagePolicy
from streamsplit.core.common.errors import UnknownLanguageTag
from streamsplit.core.config.settings import settings
from ..domain.models import DEFAULT_SUFFIX_TABLE, UNDETERMINED_LANGUAGE, freeze_table

logger = logging.getLogger(__name__)


class LanguageSuffixResolver:
    """
    Maps a language tag to the filename suffix of its output file.

    The table is read-only and injected; unknown tags never raise from
    resolve(), they go through the fallback policy:
    - ECHO:  'xx-XX' -> '.xx-XX'
    - EMPTY: 'xx-XX' -> ''
    """

    def __init__(self,
                 table: Mapping[str, str] = DEFAULT_SUFFIX_TABLE,
                 fallback: Union[UnknownLanguagePolicy, str, None] = None):
        self._table = freeze_table(table)
        self.fallback = UnknownLanguagePolicy(fallback or settings.UNKNOWN_LANGUAGE_POLICY)

    @property
    def table(self) -> Mapping[str, str]:
        return self._table

    def lookup(self, tag: Optional[str]) -> str:
        """
        Strict lookup.

        Raises:
            UnknownLanguageTag: If the tag is not in the table.
        """
        key = normalize_tag(tag)
        try:
            return self._table[key]
        except KeyError:
            raise UnknownLanguageTag(key) from None

    def resolve(self, tag: Optional[str]) -> str:
        try:
            return self.lookup(tag)
        except UnknownLanguageTag as e:
            suffix = self._fallback_suffix(e.tag)
            logger.warning(
                f"Language tag {e.tag!r} has no suffix entry; "
                f"using fallback ({self.fallback.value}) -> {suffix!r}"
            )
            return suffix

    def is_known(self, tag: Optional[str]) -> bool:
        return normalize_tag(tag) in self._table

    def _fallback_suffix(self, tag: str) -> str:
        if self.fallback == UnknownLanguagePolicy.EMPTY:
            return ""
        return f".{tag}"


def normalize_tag(tag: Optional[str]) -> str:
    """Missing or blank tags become 'und'."""
    if tag is None or not str(tag).strip():
        return UNDETERMINED_LANGUAGE
    return str(tag).strip()
