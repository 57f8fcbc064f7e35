"""
    Windows language (LCID) lookups.
"""
from __future__ import annotations

import locale
import re

from core.models import LanguageInfo

_HEX_LETTER = re.compile(r"[A-Fa-f]")


def parse_lcid(value: int | str | None, hex_digits: bool = False) -> int | None:
    """
    Normalise an LCID as CIM reports it.

    OSLanguage arrives as an integer (1033) or its decimal string ("1033").
    Locale is a hex string ("0409"); pass hex_digits=True for it. A "0x"
    prefix or an A-F digit always means hex. Anything unparseable yields None.
    """
    if value is None:
        return None
    if isinstance(value, int):
        return value

    s = value.strip()
    try:
        if s.lower().startswith("0x"):
            return int(s, 16)
        if hex_digits or _HEX_LETTER.search(s):
            return int(s, 16)
        return int(s)
    except ValueError:
        return None


def get_language(lcid: int | str | None, hex_digits: bool = False) -> LanguageInfo | None:
    """Language tag and two-letter code for a Windows LCID, or None if unknown."""
    code = parse_lcid(lcid, hex_digits)
    if code is None:
        return None

    tag = locale.windows_locale.get(code)
    if tag is None:
        return None

    return LanguageInfo(
        language_id=code,
        name=tag.replace("_", "-"),
        two_letter=tag.split("_", 1)[0],
    )
