import pytest
from pathlib import Path

from streamsplit.core.common.enums import ScanMode
from streamsplit.features.source_scanner.data.ignore_rules import IgnoreRules
from streamsplit.features.source_scanner.domain.models import ScanRequest
from streamsplit.features.source_scanner.service.scanner import SourceScanner


@pytest.fixture
def series_folder(tmp_path):
    """
    Creates a series layout with:
    - 3 episodes across two seasons
    - 2 ignored files (hidden, unfinished download)
    - a multi-part release whose name contains '.Part.'
    - a loose file in the root, which series mode doesn't pick up
    """
    root = tmp_path / "Show"
    season_1 = root / "Season 1"
    season_2 = root / "Season 2"
    season_1.mkdir(parents=True)
    season_2.mkdir()

    (season_2 / "Show - S02E01.mkv").write_bytes(b"FAKE")
    (season_1 / "Show - S01E02.mkv").write_bytes(b"FAKE")
    (season_1 / "Show - S01E01.mkv").write_bytes(b"FAKE")

    (season_1 / "._Show - S01E01.mkv").write_bytes(b"junk")
    (season_1 / "Show - S01E03.mkv.part").write_bytes(b"junk")
    (season_2 / "Show.Part.2.mkv").write_bytes(b"FAKE")
    (season_1 / "notes.txt").write_text("not a container")
    (root / "Trailer.mkv").write_bytes(b"FAKE")

    return root


def test_series_scan(series_folder):
    result = SourceScanner().scan(ScanRequest(root_path=series_folder))

    assert result.mode == ScanMode.SERIES
    assert [d.name for d in result.season_dirs] == ["Season 1", "Season 2"]
    assert [str(f.relative_to(series_folder)) for f in result.files] == [
        str(Path("Season 1") / "Show - S01E01.mkv"),
        str(Path("Season 1") / "Show - S01E02.mkv"),
        str(Path("Season 2") / "Show - S02E01.mkv"),
        str(Path("Season 2") / "Show.Part.2.mkv"),
    ]
    assert result.files_ignored == 2


def test_movie_scan(tmp_path):
    (tmp_path / "Movie.mkv").write_bytes(b"FAKE")
    (tmp_path / "Extras").mkdir()
    (tmp_path / "Extras" / "Making of.mkv").write_bytes(b"FAKE")

    result = SourceScanner().scan(ScanRequest(root_path=tmp_path))

    assert result.mode == ScanMode.MOVIE
    assert [f.name for f in result.files] == ["Movie.mkv"]


def test_empty_scan(tmp_path):
    (tmp_path / "readme.txt").write_text("nothing here")

    result = SourceScanner().scan(ScanRequest(root_path=tmp_path))

    assert result.mode == ScanMode.EMPTY
    assert result.files == []


def test_ignored_counter_resets_between_scans(series_folder):
    scanner = SourceScanner()
    scanner.scan(ScanRequest(root_path=series_folder))

    result = scanner.scan(ScanRequest(root_path=series_folder))

    assert result.files_ignored == 2


def test_custom_extension_and_prefix(tmp_path):
    (tmp_path / "S1").mkdir()
    (tmp_path / "S1" / "ep1.mka").write_bytes(b"FAKE")

    result = SourceScanner().scan(ScanRequest(root_path=tmp_path, extension=".mka", season_prefix="S"))

    assert result.mode == ScanMode.SERIES
    assert [f.name for f in result.files] == ["ep1.mka"]


def test_request_validation(tmp_path):
    with pytest.raises(FileNotFoundError):
        ScanRequest(root_path=tmp_path / "missing")

    file_path = tmp_path / "file.mkv"
    file_path.write_bytes(b"FAKE")
    with pytest.raises(NotADirectoryError):
        ScanRequest(root_path=file_path)


@pytest.mark.parametrize("name, ignored", [
    ("Show - S01E01.mkv", False),
    (".DS_Store", True),
    ("Thumbs.db", True),
    (".hidden.mkv", True),
    ("Show - S01E01.mkv.part", True),
    ("Show.Part.2.mkv", False),
    ("Show - S01E01.part.mkv", False),
    ("Show - S01E01.mkv.crdownload", True),
])
def test_ignore_rules(name, ignored):
    assert IgnoreRules.should_ignore(Path(name)) == ignored
