"""Output renderers for command results."""

from __future__ import annotations

from AdsClient.renderers.base import OutputWriter
from AdsClient.renderers.json import JsonLinesWriter, render_document

__all__ = [
    "JsonLinesWriter",
    "OutputWriter",
    "render_document",
]
