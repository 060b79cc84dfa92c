from abc import ABC, abstractmethod
from pathlib import Path

from .models import StreamCatalog


class IStreamProber(ABC):
    """
    Contract for reading per-stream metadata out of a container.
    Abstracts away the underlying tool (ffprobe) from the correlation logic.
    """

    @abstractmethod
    def probe(self, media_path: Path) -> StreamCatalog:
        """
        Reads the stream table of the given container.

        Args:
            media_path: Path to the source container.

        Returns:
            StreamCatalog in declaration order.

        Raises:
            ProbeError: If the prober could not be run or exited with an error.
            MalformedMetadata: If its output is not a list of stream records.
        """
        pass
