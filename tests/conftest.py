# File: tests/conftest.py

import os
import sys
import tempfile
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# 1. Add project root to path
sys.path.append(os.getcwd())

# 2. Keep the ledger away from the real home directory.
# Must happen before Settings is imported (it reads the env at import time).
os.environ.setdefault("STREAMSPLIT_DATA_DIR", tempfile.mkdtemp(prefix="streamsplit-tests-"))
os.environ.setdefault("STREAMSPLIT_DATABASE_URL", "sqlite://")

from streamsplit.core.common.enums import CodecType
from streamsplit.core.database.base import Base
from streamsplit.features.stream_catalog.domain.models import StreamCatalog, StreamDescriptor

# 3. Create Test Engine (one shared in-memory connection)
TEST_ENGINE = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=TEST_ENGINE)

# The catalog from the two-variant release used across the suite
SCENARIO_STREAMS = [
    (0, "video", None, None),
    (1, "audio", "ja-JP", None),
    (2, "audio", "en-US", "English [Video: Alt]"),
    (3, "video", None, "Alt"),
    (4, "subtitle", "en", "English"),
    (5, "subtitle", "en", "English (CC)"),
]


@pytest.fixture(scope="function")
def session_factory():
    """
    Fresh ledger tables for every test.
    """
    # Import models so they are registered on Base.metadata
    import streamsplit.features.ledger.data.sql_models  # noqa: F401

    Base.metadata.create_all(bind=TEST_ENGINE)
    yield TestingSessionLocal
    Base.metadata.drop_all(bind=TEST_ENGINE)


@pytest.fixture
def make_catalog():
    """
    Builds a StreamCatalog from (index, codec_type, language, title) tuples.
    """
    def _make(streams, source=Path("Show - S01E01.mkv")):
        return StreamCatalog(
            source=Path(source),
            streams=tuple(
                StreamDescriptor(index=index, codec_type=CodecType(kind), language=language, title=title)
                for index, kind, language, title in streams
            )
        )
    return _make


@pytest.fixture
def scenario_catalog(make_catalog):
    return make_catalog(SCENARIO_STREAMS)


@pytest.fixture
def scenario_at(make_catalog):
    """Same catalog, pointing at a given source path."""
    def _at(source):
        return make_catalog(SCENARIO_STREAMS, source=source)
    return _at
