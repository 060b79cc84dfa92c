# File: streamsplit/features/stream_catalog/data/probe_parser.py
import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from streamsplit.core.common.enums import CodecType
from streamsplit.core.common.errors import MalformedMetadata
from ..domain.models import StreamCatalog, StreamDescriptor

ProbeDocument = Union[Mapping[str, Any], Sequence[Mapping[str, Any]]]


def parse_probe_output(text: str, source: Path) -> StreamCatalog:
    """
    Decodes raw ffprobe JSON output and builds the catalog.
    """
    try:
        document = json.loads(text)
    except (TypeError, ValueError) as e:
        raise MalformedMetadata(f"Probe output for {source.name} is not valid JSON: {e}") from e
    return build_catalog(document, source)


def build_catalog(document: ProbeDocument, source: Path) -> StreamCatalog:
    """
    Builds a StreamCatalog from a decoded probe document.

    Accepts either the full document ({"streams": [...]}) or the bare list of
    stream records. Each record needs 'index' and 'codec_type'; 'tags.language'
    and 'tags.title' are optional.
    """
    records = _stream_records(document, source)

    descriptors: List[StreamDescriptor] = []
    seen = set()
    for position, record in enumerate(records):
        descriptor = _parse_record(record, position, source)
        if descriptor.index in seen:
            raise MalformedMetadata(f"{source.name}: duplicate stream index {descriptor.index}")
        seen.add(descriptor.index)
        descriptors.append(descriptor)

    return StreamCatalog(source=source, streams=tuple(descriptors))


def _stream_records(document: ProbeDocument, source: Path) -> Sequence[Any]:
    if isinstance(document, Mapping):
        if "streams" not in document:
            raise MalformedMetadata(f"{source.name}: probe output has no 'streams' entry")
        records = document["streams"]
    else:
        records = document

    if isinstance(records, (str, bytes)) or not isinstance(records, Sequence):
        raise MalformedMetadata(f"{source.name}: 'streams' is not a list")
    return records


def _parse_record(record: Any, position: int, source: Path) -> StreamDescriptor:
    if not isinstance(record, Mapping):
        raise MalformedMetadata(f"{source.name}: stream record #{position} is not an object")

    # 1. Index (ffprobe emits ints; tolerate digit strings from hand-written fixtures)
    raw_index = record.get("index")
    if isinstance(raw_index, bool):
        raw_index = None
    if isinstance(raw_index, str):
        try:
            raw_index = int(raw_index.strip())
        except ValueError:
            raw_index = None
    if not isinstance(raw_index, int) or raw_index < 0:
        raise MalformedMetadata(
            f"{source.name}: stream record #{position} has invalid index {record.get('index')!r}"
        )

    # 2. Codec type
    raw_type = record.get("codec_type")
    if not isinstance(raw_type, str) or not raw_type.strip():
        raise MalformedMetadata(f"{source.name}: stream {raw_index} has no codec_type")

    # 3. Tags
    tags = record.get("tags") or {}
    if not isinstance(tags, Mapping):
        raise MalformedMetadata(f"{source.name}: stream {raw_index} has malformed tags")

    return StreamDescriptor(
        index=raw_index,
        codec_type=CodecType.from_probe(raw_type),
        language=_tag(tags, "language"),
        title=_tag(tags, "title"),
    )


def _tag(tags: Dict[str, Any], key: str) -> Optional[str]:
    value = tags.get(key)
    if value is None:
        return None
    text = str(value).strip()
    return text or None
