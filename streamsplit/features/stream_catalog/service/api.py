from pathlib import Path
from ..domain.models import StreamCatalog
from ..data.ffprobe_adapter import FFprobeAdapter


def probe_catalog(media_path: str) -> StreamCatalog:
    """
    Standalone API: reads the stream table of a container.
    Useful for inspecting a file without building a plan.
    """
    adapter = FFprobeAdapter()
    return adapter.probe(Path(media_path))
