"""
    Translation of SMO URNs into SQL Server provider paths.

    Server[@Name='HOST\\INST']/Database[@Name='Sales']/Table[@Name='Orders' and @Schema='dbo']
      -> SQLSERVER:\\SQL\\HOST\\INST\\Databases\\Sales\\Tables\\dbo.Orders
"""
from __future__ import annotations

import re

from core.errors import UrnFormatError
from shared.sqlname import encode_sql_name

PROVIDER_ROOT = "SQLSERVER:\\SQL"
DEFAULT_INSTANCE = "DEFAULT"

# Object types whose provider folder is not simply "<Type>s"
COLLECTION_NAMES = {
    "Index": "Indexes",
    "Schema": "Schemas",
    "Statistic": "Statistics",
    "FullTextIndex": "FullTextIndexes",
    "XmlSchemaCollection": "XmlSchemaCollections",
    "FileGroup": "FileGroups",
    "LogFile": "LogFiles",
    "Property": "Properties",
    "ExtendedProperty": "ExtendedProperties",
    "AsymmetricKey": "AsymmetricKeys",
    "Certificate": "Certificates",
    "Audit": "Audits",
    "Alias": "Aliases",
    "DatabaseMirroringEndpoint": "Endpoints",
    "Endpoint": "Endpoints",
    "AvailabilityGroup": "AvailabilityGroups",
}

_SEGMENT = re.compile(r"^\s*(\w+)\s*\[(.*)\]\s*$", re.DOTALL)
_PREDICATE = re.compile(
    r"\s*@(\w+)\s*=\s*'((?:[^']|'')*)'(?:\s+and\s+(?=@)|\s*$)",
    re.IGNORECASE,
)


def _split_segments(urn: str) -> list[str]:
    segments: list[str] = []
    current: list[str] = []
    depth = 0
    in_quote = False
    i = 0

    while i < len(urn):
        ch = urn[i]
        if in_quote:
            if ch == "'":
                if urn[i + 1:i + 2] == "'":
                    current.append("''")
                    i += 2
                    continue
                in_quote = False
        elif ch == "'":
            if depth == 0:
                raise UrnFormatError(f"Quote outside of a predicate at offset {i}: {urn!r}")
            in_quote = True
        elif ch == "[":
            depth += 1
        elif ch == "]":
            depth -= 1
            if depth < 0:
                raise UrnFormatError(f"Unbalanced ']' at offset {i}: {urn!r}")
        elif ch == "/" and depth == 0:
            segments.append("".join(current))
            current = []
            i += 1
            continue
        current.append(ch)
        i += 1

    if in_quote:
        raise UrnFormatError(f"Unterminated quoted value: {urn!r}")
    if depth != 0:
        raise UrnFormatError(f"Unbalanced '[': {urn!r}")
    segments.append("".join(current))
    return segments


def _parse_segment(segment: str) -> tuple[str, dict[str, str]]:
    m = _SEGMENT.match(segment)
    if m is None:
        raise UrnFormatError(f"Malformed URN segment: {segment!r}")
    obj_type, body = m.group(1), m.group(2)

    attrs: dict[str, str] = {}
    pos = 0
    while pos < len(body):
        p = _PREDICATE.match(body, pos)
        if p is None:
            raise UrnFormatError(f"Malformed predicate in segment: {segment!r}")
        attrs[p.group(1).lower()] = p.group(2).replace("''", "'")
        pos = p.end()

    if "name" not in attrs:
        raise UrnFormatError(f"Segment has no @Name: {segment!r}")
    return obj_type, attrs


def collection_name(obj_type: str) -> str:
    return COLLECTION_NAMES.get(obj_type, obj_type + "s")


def convert_urn_to_path(urn: str) -> str:
    """Convert an SMO URN into a SQLSERVER: provider path."""
    if not urn or not urn.strip():
        raise UrnFormatError("URN is empty")

    segments = _split_segments(urn.strip())
    server_type, server_attrs = _parse_segment(segments[0])
    if server_type.lower() != "server":
        raise UrnFormatError(f"URN must start with a Server segment: {urn!r}")

    machine, _, instance = server_attrs["name"].partition("\\")
    if not machine:
        raise UrnFormatError(f"Server segment has an empty name: {urn!r}")

    parts = [PROVIDER_ROOT, encode_sql_name(machine), encode_sql_name(instance or DEFAULT_INSTANCE)]

    for segment in segments[1:]:
        obj_type, attrs = _parse_segment(segment)
        name = encode_sql_name(attrs["name"])
        if "schema" in attrs:
            name = f"{encode_sql_name(attrs['schema'])}.{name}"
        parts.append(collection_name(obj_type))
        parts.append(name)

    return "\\".join(parts)
