from pqclient.contracts.models import PrimusQuery
from pqclient.policy.query_policy import QueryPolicy


def test_allows_plain_query():
    p = QueryPolicy()
    assert p.validate(PrimusQuery(host="h", search="NAME=x", data="line one\nline two")) == []


def test_blocks_directive_in_data():
    p = QueryPolicy()
    violations = p.validate(PrimusQuery(data="ok\n#OUTPUT /etc/passwd"))
    assert violations == ["Directive-like line 2 in data block"]


def test_blocks_newline_in_directive_field():
    p = QueryPolicy()
    assert p.validate(PrimusQuery(search="x\n#PASS y"))
