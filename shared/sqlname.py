"""
    Encoding of SQL Server identifiers for use in provider paths.

    Characters that separate or wildcard path segments are replaced by a
    percent sign and the two-digit hex code of the character, the way the
    SQL Server PowerShell provider expects delimited identifiers.
"""
import re

ESCAPED_CHARACTERS = "\\:./%<>*?[]|"

_ENCODE = {ch: f"%{ord(ch):02X}" for ch in ESCAPED_CHARACTERS}
_DECODE = {code: ch for ch, code in _ENCODE.items()}

_ESCAPE_SEQUENCE = re.compile(r"%[0-9A-Fa-f]{2}")


def encode_sql_name(name: str) -> str:
    """Escape every provider-reserved character in name."""
    return "".join(_ENCODE.get(ch, ch) for ch in name)


def decode_sql_name(name: str) -> str:
    """
    Reverse encode_sql_name.

    Only the escapes of reserved characters are decoded (case-insensitive);
    any other %XX sequence is kept as written.
    """
    def _replace(m: re.Match) -> str:
        return _DECODE.get(m.group(0).upper(), m.group(0))

    return _ESCAPE_SEQUENCE.sub(_replace, name)
