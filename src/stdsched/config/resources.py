"""Package resource lookup, the counterpart of a class-path resource search."""
import os
import sys
from importlib import resources
from pathlib import Path
from typing import IO, Any, List, Optional, Sequence, Union

from stdsched.infrastructure.logging.logger import get_logger

logger = get_logger(__name__)

SearchRoot = Union[str, 'os.PathLike[str]', Any]


class ResourceLocator:
    """
    Resolves resource names against an ordered list of search roots.

    A root is a filesystem directory or an importlib Traversable. Names are
    '/'-separated and relative to a root; a leading '/' is ignored, so
    'name' and '/name' resolve the same way.
    """

    def __init__(self, search_roots: Optional[Sequence[SearchRoot]] = None):
        self._search_roots: List[Any] = []
        for root in search_roots or ():
            if isinstance(root, (str, os.PathLike)):
                root = Path(root)
            self._search_roots.append(root)

    @classmethod
    def default(cls, package: str = "stdsched") -> 'ResourceLocator':
        """Locator over the given package directory followed by sys.path entries."""
        roots: List[SearchRoot] = []
        try:
            roots.append(resources.files(package))
        except ModuleNotFoundError:
            logger.warning("Resource package not importable", package=package)
        roots.extend(entry for entry in sys.path if entry and os.path.isdir(entry))
        return cls(roots)

    @property
    def search_roots(self) -> List[Any]:
        return list(self._search_roots)

    def has_context(self) -> bool:
        """Whether any search root is available for lookups."""
        return bool(self._search_roots)

    def find(self, name: str) -> Optional[Any]:
        """Return the first matching resource path, or None."""
        parts = [part for part in name.lstrip('/').split('/') if part]
        if not parts:
            return None
        for root in self._search_roots:
            candidate = root
            for part in parts:
                candidate = candidate.joinpath(part)
            if candidate.is_file():
                return candidate
        return None

    def open(self, name: str) -> Optional[IO[bytes]]:
        """Open the first matching resource as a binary stream, or return None."""
        candidate = self.find(name)
        if candidate is None:
            return None
        logger.debug("Found resource", resource=name, location=str(candidate))
        return candidate.open('rb')
