import json

import pytest

from app.services.typesense import dump_jsonl, load_jsonl


def test_dump_is_compact_and_newline_joined():
    body = dump_jsonl([{"a": 1, "b": [1, 2]}, {"a": 2}])

    assert body == '{"a":1,"b":[1,2]}\n{"a":2}'
    assert not body.endswith("\n")


def test_dump_keeps_non_ascii():
    assert dump_jsonl([{"name": "Cuchilla pequeña"}]) == '{"name":"Cuchilla pequeña"}'


def test_dump_of_nothing_is_empty():
    assert dump_jsonl([]) == ""


def test_embedded_newlines_stay_on_one_line(product_payload):
    documents = [product_payload, dict(product_payload, odoo_id=102)]

    body = dump_jsonl(documents)

    assert len(body.split("\n")) == 2
    assert load_jsonl(body) == documents


def test_round_trip_preserves_order_and_data(make_payload):
    documents = [make_payload(odoo_id=odoo_id) for odoo_id in range(1, 6)]

    lines = dump_jsonl(documents).split("\n")

    assert [json.loads(line) for line in lines] == documents


def test_load_skips_blank_lines():
    assert load_jsonl('{"success":true}\n\n{"success":false}\n') == [
        {"success": True},
        {"success": False},
    ]


def test_load_rejects_bad_line():
    with pytest.raises(ValueError) as exc_info:
        load_jsonl('{"success":true}\n{"success":')

    assert "line 2" in str(exc_info.value)
