import json
import pytest
from pathlib import Path

from streamsplit.core.common.enums import CodecType
from streamsplit.core.common.errors import MalformedMetadata
from streamsplit.features.stream_catalog.data.probe_parser import build_catalog, parse_probe_output

SOURCE = Path("Show - S01E01.mkv")


def test_parses_ffprobe_document():
    output = json.dumps({
        "streams": [
            {"index": 0, "codec_type": "video"},
            {"index": 1, "codec_type": "audio", "tags": {"language": "ja-JP"}},
            {"index": 2, "codec_type": "audio", "tags": {"language": "en-US", "title": "English [Video: Alt]"}},
            {"index": 3, "codec_type": "subtitle", "tags": {"language": "en", "title": "English (CC)"}},
            {"index": 4, "codec_type": "attachment", "tags": {"title": "font.ttf"}},
        ]
    })

    catalog = parse_probe_output(output, SOURCE)

    assert catalog.source == SOURCE
    assert len(catalog) == 5
    assert [s.index for s in catalog.videos] == [0]
    assert catalog.audio_indices == [1, 2]
    assert catalog.get(2).title == "English [Video: Alt]"
    assert catalog.get(1).title is None
    assert catalog.get(3).codec_type == CodecType.SUBTITLE
    assert catalog.get(4).codec_type == CodecType.OTHER
    assert catalog.get(99) is None


def test_accepts_bare_stream_list_and_orders_by_index():
    catalog = build_catalog([
        {"index": 2, "codec_type": "audio"},
        {"index": 0, "codec_type": "video"},
        {"index": 1, "codec_type": "audio"},
    ], SOURCE)

    assert [s.index for s in catalog.streams] == [0, 1, 2]


def test_blank_tags_become_none():
    catalog = build_catalog([
        {"index": 0, "codec_type": "audio", "tags": {"language": "  ", "title": ""}},
    ], SOURCE)

    stream = catalog.get(0)
    assert stream.language is None
    assert stream.title is None


def test_digit_string_index_is_accepted():
    catalog = build_catalog([{"index": "3", "codec_type": "audio"}], SOURCE)
    assert catalog.audio_indices == [3]


def test_empty_stream_list_is_a_valid_catalog():
    catalog = build_catalog({"streams": []}, SOURCE)
    assert len(catalog) == 0
    assert catalog.videos == []


def test_invalid_json_raises_malformed_metadata():
    with pytest.raises(MalformedMetadata):
        parse_probe_output("{not json", SOURCE)


@pytest.mark.parametrize("document", [
    {"format": {}},                                              # no streams entry
    {"streams": "video,audio"},                                  # not a list
    {"streams": ["video"]},                                      # record is not an object
    {"streams": [{"codec_type": "video"}]},                      # missing index
    {"streams": [{"index": -1, "codec_type": "video"}]},         # negative index
    {"streams": [{"index": True, "codec_type": "video"}]},       # bool is not an index
    {"streams": [{"index": "\u00b2", "codec_type": "audio"}]},    # superscript two is not an index
    {"streams": [{"index": 0}]},                                 # missing codec_type
    {"streams": [{"index": 0, "codec_type": "audio", "tags": ["en"]}]},
    {"streams": [{"index": 0, "codec_type": "video"}, {"index": 0, "codec_type": "audio"}]},
])
def test_malformed_documents_are_rejected(document):
    with pytest.raises(MalformedMetadata):
        build_catalog(document, SOURCE)


def test_malformed_metadata_is_a_value_error():
    with pytest.raises(ValueError):
        build_catalog({"streams": None}, SOURCE)
