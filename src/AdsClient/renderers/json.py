"""JSON output renderers.

Documents are written as newline-delimited JSON: one compact object per line
containing only the fields the server returned, keyed by their API names.
"""

from __future__ import annotations

import json
from typing import Any, TextIO

from AdsClient.renderers.base import OutputWriter


def render_document(doc: Any) -> str:
    """Render one document as a single JSON line (without the newline)."""
    return json.dumps(doc.to_dict(), ensure_ascii=False, separators=(",", ":"))


class JsonLinesWriter(OutputWriter):
    """Stream documents to a text stream as they arrive."""

    def __init__(self, stream: TextIO) -> None:
        """Initialize the writer.

        Args:
            stream: Destination, typically ``sys.stdout``.
        """
        self.stream = stream
        self.count = 0

    def write_document(self, doc: Any) -> None:
        self.stream.write(render_document(doc))
        self.stream.write("\n")
        self.count += 1

    def write_text(self, text: str) -> None:
        self.stream.write(text)
        if not text.endswith("\n"):
            self.stream.write("\n")

    def finalize(self) -> None:
        self.stream.flush()
