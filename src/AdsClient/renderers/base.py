"""Base classes for output writers.

Separates command control flow from how results are written, so commands can
be exercised in tests against an in-memory stream.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class OutputWriter(ABC):
    """Abstract base class for command output writers."""

    @abstractmethod
    def write_document(self, doc: Any) -> None:
        """Write one search result document."""

    @abstractmethod
    def write_text(self, text: str) -> None:
        """Write a block of preformatted text, e.g. an export."""

    def finalize(self) -> None:
        """Flush any buffered output."""
