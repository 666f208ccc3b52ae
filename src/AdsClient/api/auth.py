"""API token discovery.

Locations are checked in this order:

1. the ``ADS_API_TOKEN`` environment variable,
2. the ``ADS_DEV_KEY`` environment variable,
3. the contents of ``~/.ads/token``,
4. the contents of ``~/.ads/dev_key``.

These match the locations used by the other ADS clients.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping

from AdsClient.core.errors import TokenNotFoundError
from AdsClient.utils.log import log

TOKEN_ENV_VARS: tuple[str, ...] = ("ADS_API_TOKEN", "ADS_DEV_KEY")
TOKEN_FILES: tuple[str, ...] = ("token", "dev_key")
TOKEN_DIR_NAME = ".ads"


def resolve_token(
    *,
    environ: Mapping[str, str] | None = None,
    home: Path | None = None,
) -> str:
    """Return the first API token found.

    Args:
        environ: Environment mapping; defaults to ``os.environ``.
        home: Home directory; defaults to ``Path.home()``.

    Returns:
        The token, stripped of surrounding whitespace.

    Raises:
        TokenNotFoundError: If no location provides a non-empty token.
    """
    environ = os.environ if environ is None else environ
    for name in TOKEN_ENV_VARS:
        token = (environ.get(name) or "").strip()
        if token:
            log.debug("API token loaded from $%s", name)
            return token

    token_dir = (home if home is not None else Path.home()) / TOKEN_DIR_NAME
    for filename in TOKEN_FILES:
        path = token_dir / filename
        try:
            token = path.read_text(encoding="utf-8").strip()
        except OSError:
            continue
        if token:
            log.debug("API token loaded from %s", path)
            return token

    raise TokenNotFoundError(
        "could not find API token; set ADS_API_TOKEN or write it to ~/.ads/token"
    )
