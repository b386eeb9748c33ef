from __future__ import annotations

import codecs
import logging
import re

"""Character encoding detection for CSV uploads.

Spreadsheet tools on Arabic-locale systems often save CSV as Windows-1256.
Such a file sometimes still decodes as (wrong) UTF-8 without raising, which
silently corrupts every Arabic field. `detect_encoding` decides between UTF-8
and the legacy code page before any text is decoded.
"""

__all__ = [
    "UTF8",
    "LEGACY_ARABIC",
    "detect_encoding",
    "decode_bytes",
]

logger = logging.getLogger(__name__)

UTF8 = "utf-8"
LEGACY_ARABIC = "windows-1256"

_ARABIC_RE = re.compile(r"[\u0600-\u06FF\u0750-\u077F\uFB50-\uFDFF\uFE70-\uFEFE]")
# 2+ consecutive Latin-1 supplement characters = mojibake signature
_LATIN1_RUN_RE = re.compile(r"[\u0080-\u00FF]{2,}")


def detect_encoding(data: bytes) -> str:
    """Return "utf-8" or "windows-1256" for a raw CSV byte buffer.

    Steps:
    1. UTF-8 BOM -> utf-8 (unconditionally)
    2. Strict UTF-8 decode fails -> windows-1256
    3. Decoded text has no Arabic letters but has Latin-1 runs -> windows-1256
    4. Otherwise utf-8
    """
    if data.startswith(codecs.BOM_UTF8):
        return UTF8
    try:
        text = data.decode(UTF8, errors="strict")
    except UnicodeDecodeError:
        logger.debug("strict utf-8 decode failed -> %s", LEGACY_ARABIC)
        return LEGACY_ARABIC
    if not _ARABIC_RE.search(text) and _LATIN1_RUN_RE.search(text):
        logger.debug("utf-8 decode looks like mojibake -> %s", LEGACY_ARABIC)
        return LEGACY_ARABIC
    return UTF8


def decode_bytes(data: bytes, encoding: str | None = None) -> tuple[str, str]:
    """Decode `data` with the detected (or given) encoding.

    Raises:
        UnicodeDecodeError: BOM-prefixed data that is not valid UTF-8

    Returns:
        (text, encoding) where text never carries a leading BOM
    """
    enc = encoding or detect_encoding(data)
    if enc == UTF8:
        # utf-8-sig は BOM を除去する (無ければ utf-8 と同じ)
        return data.decode("utf-8-sig"), enc
    # cp1256 maps every byte except a few undefined ones; replace those
    return data.decode(enc, errors="replace"), enc
