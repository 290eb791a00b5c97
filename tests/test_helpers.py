import json
from dataclasses import dataclass

import pytest

from policyreporter.helpers import contains, json_response


@pytest.mark.parametrize("source", ["Kyverno", "kyverno", "KYVERNO"])
def test_contains_ignores_case(source):
    assert contains(source, ["test", "Kyverno"]) is True


def test_contains_missing_entry():
    assert contains("Trivy", ["test", "Kyverno"]) is False


def test_contains_empty_list():
    assert contains("Kyverno", []) is False


def test_json_response_round_trip():
    data = [{"name": "nginx", "count": 3}, {"name": "redis", "count": 0}]
    status, headers, body = json_response(data, None)
    assert status == 200
    assert headers["Content-Type"] == "application/json; charset=UTF-8"
    assert json.loads(body) == data
    assert body.endswith("\n")


def test_json_response_escapes_html_characters_in_json():
    status, _, body = json_response({"k": "<b>"}, None)
    assert status == 200
    assert "<" not in body
    assert "\\u003c" in body
    assert json.loads(body) == {"k": "<b>"}


def test_json_response_none_is_null():
    _, _, body = json_response(None, None)
    assert body.strip() == "null"


def test_json_response_error():
    status, headers, body = json_response([1, 2], RuntimeError("boom"))
    assert status == 500
    assert headers["Content-Type"] == "application/json; charset=UTF-8"
    assert body == '{ "message": "boom" }'


def test_json_response_error_message_is_html_escaped():
    _, _, body = json_response(None, RuntimeError("<a>"))
    assert "<a>" not in body
    assert "&lt;a&gt;" in body


def test_json_response_unencodable_data():
    status, _, body = json_response({"k": object()}, None)
    assert status == 500
    assert body.startswith('{ "message": ')


def test_json_response_serialises_dataclasses():
    @dataclass
    class Item:
        name: str
        count: int

    status, _, body = json_response([Item("nginx", 2)], None)
    assert status == 200
    assert json.loads(body) == [{"name": "nginx", "count": 2}]