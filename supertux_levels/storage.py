"""Storage abstraction used for existence checks, reads and directory listings.

Level code never touches ``os`` directly so tests and embedders can supply a
different backing store (an archive, an in-memory fake) by implementing the
three methods of ``Storage``.
"""

import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, List, Optional, Union

PathLike = Union[str, Path]


class Storage(ABC):
    """Minimal read-side filesystem interface."""

    @abstractmethod
    def exists(self, path: PathLike) -> bool:
        """Returns True if ``path`` names an existing file or directory."""
        pass

    @abstractmethod
    def open(self, path: PathLike) -> IO[bytes]:
        """Opens ``path`` for binary reading.

        Raises:
            FileNotFoundError: If the path does not exist.
        """
        pass

    @abstractmethod
    def listdir(self, path: PathLike) -> List[str]:
        """Returns the sorted entry names of the directory ``path``."""
        pass


class LocalStorage(Storage):
    """Storage backed by the local filesystem.

    Args:
        root (Optional[PathLike]): Directory relative paths are resolved against.
            Defaults to the current working directory at call time.
    """

    def __init__(self, root: Optional[PathLike] = None) -> None:
        self.root = Path(root) if root is not None else None

    def resolve(self, path: PathLike) -> Path:
        path = Path(path)
        if self.root is None or path.is_absolute():
            return path
        return self.root / path

    def exists(self, path: PathLike) -> bool:
        return self.resolve(path).exists()

    def open(self, path: PathLike) -> IO[bytes]:
        return self.resolve(path).open("rb")

    def listdir(self, path: PathLike) -> List[str]:
        return sorted(os.listdir(self.resolve(path)))
