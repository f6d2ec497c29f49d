import pytest

from pqclient.contracts.models import PrimusQuery
from pqclient.errors import QueryFormatError, UnsafeQueryError
from pqclient.query.serializer import parse, render

FULL = PrimusQuery(
    charset="UTF-8",
    host="pq.example",
    port="4444",
    user="admin",
    password="secret",
    output="out.json",
    database="CARDS",
    search="NAME=Smith",
    header="[",
    data="{ID}\n{NAME}",
    footer="]",
)


def test_render_field_order():
    text = render(FULL)
    assert text == (
        "#CHARSET UTF-8\n"
        "#HOST pq.example\n"
        "#PORT 4444\n"
        "#USER admin\n"
        "#PASS secret\n"
        "#OUTPUT out.json\n"
        "#DATABASE CARDS\n"
        "#SEARCH NAME=Smith\n"
        "#SORT V1\n"
        "#HEADER_START\n[\n#HEADER_STOP\n"
        "{ID}\n{NAME}\n"
        "#FOOTER_START\n]\n#FOOTER_STOP\n"
    )


def test_render_omits_empty_blocks():
    text = render(PrimusQuery(host="h", data="{ID}"))
    assert "HEADER" not in text
    assert "FOOTER" not in text
    assert text.endswith("#SORT V1\n{ID}\n")


def test_render_is_deterministic():
    assert render(FULL) == render(FULL)


@pytest.mark.parametrize(
    "query",
    [
        FULL,
        PrimusQuery(),
        PrimusQuery(host="h", header="a\nb"),
        PrimusQuery(host="h", footer="end", data=""),
    ],
)
def test_parse_reads_back_rendered_text(query):
    assert parse(render(query)) == query
    assert render(parse(render(query))) == render(query)


def test_payload_passes_through_unescaped():
    text = render(PrimusQuery(data="#OUTPUT /tmp/x"))
    assert "\n#OUTPUT /tmp/x\n" in text


def test_strict_mode_refuses_forged_directive():
    with pytest.raises(UnsafeQueryError) as exc:
        render(PrimusQuery(data="#OUTPUT /tmp/x"), strict=True)
    assert exc.value.violations


def test_parse_rejects_missing_directive():
    with pytest.raises(QueryFormatError):
        parse("#CHARSET x\n#PORT 1\n")
