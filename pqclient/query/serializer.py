"""pqclient.query.serializer

Renders a PrimusQuery into the line-oriented primusquery file format.

Format (field order is fixed by the executable's grammar):

    #CHARSET <charset>
    #HOST <host>
    #PORT <port>
    #USER <user>
    #PASS <password>
    #OUTPUT <output>
    #DATABASE <database>
    #SEARCH <search>
    #SORT V1
    #HEADER_START / <header> / #HEADER_STOP     only if header is non-empty
    <data>
    #FOOTER_START / <footer> / #FOOTER_STOP     only if footer is non-empty

Values are written verbatim. Use strict=True to refuse payloads that would
be read as directives (see QueryPolicy).
"""

from __future__ import annotations
from dataclasses import replace
from typing import Optional

from pqclient.contracts.models import PrimusQuery
from pqclient.errors import QueryFormatError, UnsafeQueryError
from pqclient.policy.query_policy import QueryPolicy

SORT_DIRECTIVE = "V1"

# (directive, PrimusQuery field); None = fixed value
_DIRECTIVES: list[tuple[str, Optional[str]]] = [
    ("CHARSET", "charset"),
    ("HOST", "host"),
    ("PORT", "port"),
    ("USER", "user"),
    ("PASS", "password"),
    ("OUTPUT", "output"),
    ("DATABASE", "database"),
    ("SEARCH", "search"),
    ("SORT", None),
]

HEADER_START, HEADER_STOP = "#HEADER_START", "#HEADER_STOP"
FOOTER_START, FOOTER_STOP = "#FOOTER_START", "#FOOTER_STOP"


def render(query: PrimusQuery, strict: bool = False, policy: Optional[QueryPolicy] = None) -> str:
    if strict:
        violations = (policy or QueryPolicy()).validate(query)
        if violations:
            raise UnsafeQueryError(violations)

    parts: list[str] = []
    for key, field_name in _DIRECTIVES:
        value = getattr(query, field_name) if field_name else SORT_DIRECTIVE
        parts.append(f"#{key} {value}\n")
    if query.header:
        parts.append(f"{HEADER_START}\n{query.header}\n{HEADER_STOP}\n")
    parts.append(query.data + "\n")
    if query.footer:
        parts.append(f"{FOOTER_START}\n{query.footer}\n{FOOTER_STOP}\n")
    return "".join(parts)


def parse(text: str) -> PrimusQuery:
    """Read a rendered query document back into a PrimusQuery.

    Inverse of render() for documents whose payloads do not contain the
    block delimiter lines themselves.
    """
    if not text.endswith("\n"):
        raise QueryFormatError("Query document must end with a newline")

    lines = text[:-1].split("\n")
    if len(lines) < len(_DIRECTIVES) + 1:
        raise QueryFormatError("Query document is missing directive lines")

    values: dict[str, str] = {}
    for line, (key, field_name) in zip(lines, _DIRECTIVES):
        prefix = f"#{key} "
        if not line.startswith(prefix):
            raise QueryFormatError(f"Expected {prefix.strip()} directive, got {line[:40]!r}")
        if field_name:
            values[field_name] = line[len(prefix):]

    rest = lines[len(_DIRECTIVES):]

    header = ""
    if rest and rest[0] == HEADER_START:
        try:
            stop = rest.index(HEADER_STOP, 1)
        except ValueError:
            raise QueryFormatError("Unterminated header block") from None
        header = "\n".join(rest[1:stop])
        rest = rest[stop + 1:]

    footer = ""
    if len(rest) >= 2 and rest[-1] == FOOTER_STOP:
        starts = [i for i, line in enumerate(rest[:-1]) if line == FOOTER_START]
        if not starts:
            raise QueryFormatError("Footer stop without footer start")
        start = starts[-1]
        footer = "\n".join(rest[start + 1:-1])
        rest = rest[:start]

    if not rest:
        raise QueryFormatError("Query document has no data line")

    return replace(PrimusQuery(**values), header=header, data="\n".join(rest), footer=footer)
