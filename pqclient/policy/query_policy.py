"""pqclient.policy.query_policy

Strict-mode validation of query payloads.

The primusquery format has no escaping: a payload line starting with `#`
is read as a directive, and a newline inside a `#KEY value` field starts a
new line. This policy reports both so strict callers can refuse the query.
It is opt-in; the default rendering passes payloads through verbatim.
"""

from __future__ import annotations
from typing import List

from pqclient.contracts.models import PrimusQuery

_DIRECTIVE_FIELDS = ("charset", "host", "port", "user", "password", "output", "database", "search")
_BLOCK_FIELDS = ("header", "data", "footer")


class QueryPolicy:
    """Validates that a query cannot forge extra directive lines."""

    def validate(self, query: PrimusQuery) -> List[str]:
        """Return a list of violations; empty means 'looks safe'."""
        violations: List[str] = []

        for name in _DIRECTIVE_FIELDS:
            value = getattr(query, name)
            if "\n" in value or "\r" in value:
                violations.append(f"Line break in {name} field")

        for name in _BLOCK_FIELDS:
            value = getattr(query, name)
            for lineno, line in enumerate(value.splitlines(), start=1):
                if line.lstrip().startswith("#"):
                    violations.append(f"Directive-like line {lineno} in {name} block")
                    break

        return violations
