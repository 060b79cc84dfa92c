from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterator


class IFileWalker(ABC):
    """
    Contract for listing candidate files of one directory.
    """
    @abstractmethod
    def walk(self, directory: Path, extension: str) -> Iterator[Path]:
        """
        Yields files with the given extension, in name order.
        Should handle filtering of system/hidden files internally.
        """
        pass
