from pathlib import Path
from typing import Iterator
from ..domain.interfaces import IFileWalker
from .ignore_rules import IgnoreRules


class LocalFileWalker(IFileWalker):
    """
    Concrete implementation over pathlib; one directory level only.
    """

    def __init__(self):
        self.ignored = 0

    def walk(self, directory: Path, extension: str) -> Iterator[Path]:
        wanted = extension.lower()
        for item in sorted(directory.iterdir(), key=lambda p: p.name):
            if not item.is_file():
                continue
            if IgnoreRules.should_ignore(item):
                self.ignored += 1
                continue
            if item.suffix.lower() != wanted:
                continue
            yield item
