"""An embedder-owned cache of documents keyed by canonical path."""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path

from .document import Document


class DocumentRegistry:
    """Create each path's `Document` once and hand back the same one after.

    Paths are canonicalized with `Path.resolve`, so different spellings of a
    path share a document. A registry is an ordinary object: create one per
    application (or per run) and drop it to discard its documents.

    Args:
        factory: Builds a document for a canonical path. Defaults to `Document`.

    Examples:
        registry = DocumentRegistry()
        doc = registry.get("pkg/module.py")
        doc is registry.get("./pkg/../pkg/module.py")  # True
    """

    def __init__(self, factory: Callable[[Path], Document] = Document):
        self._factory = factory
        self._documents: dict[Path, Document] = {}

    @staticmethod
    def canonical(path: str | os.PathLike[str]) -> Path:
        return Path(path).expanduser().resolve()

    def get(self, path: str | os.PathLike[str]) -> Document:
        """Return the document for `path`, creating it on first use."""
        key = self.canonical(path)
        document = self._documents.get(key)
        if document is None:
            document = self._factory(key)
            self._documents[key] = document
        return document

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, os.PathLike)):
            return False
        return self.canonical(path) in self._documents

    def __len__(self) -> int:
        return len(self._documents)

    def clear(self) -> None:
        self._documents.clear()
