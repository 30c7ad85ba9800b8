import json

import pytest

from envelope import Envelope, decode_body, is_success


@pytest.mark.parametrize("raw", [
    '{"status": "error"}',
    '{"status": "SUCCESS", "data": {"id": 1}}',
    '{"data": {"id": 1}}',
    '[{"status": "success"}]',
    '"success"',
    "",
    "{not json",
    None,
])
def test_not_success(raw):
    envelope = Envelope.parse(raw)
    assert envelope.ok is False
    assert envelope.payload() is None
    assert envelope.field("id") is None


def test_from_result_and_bytes():
    assert Envelope.from_result({"status": "success", "data": [1]}).payload() == [1]
    assert Envelope.parse(b'{"status": "success", "data": 5}').payload() == 5


def test_json_string_body_is_decoded_once():
    inner = json.dumps({"status": "success", "data": {"id": 5}})
    assert Envelope.parse(json.dumps(inner)).ok is False
    assert Envelope.from_result(inner).ok is False


def test_error_status_kept_for_logging():
    assert Envelope.parse('{"status": "error", "data": "Not authorised"}').status == "error"


def test_field_needs_object_payload():
    assert Envelope.parse('{"status": "success", "data": [{"id": 1}]}').field("id") is None
    assert Envelope.parse('{"status": "success", "data": {"total": 0}}').field("total") == 0


@pytest.mark.parametrize("value", [0, "", "0", False, None])
def test_empty_identifier(value):
    envelope = Envelope(ok=True, data={"id": value})
    assert envelope.identifier() is None


def test_identifier():
    assert Envelope(ok=True, data={"id": "12"}).identifier() == "12"


def test_decode_body():
    assert decode_body('{"a": 1}') == {"a": 1}
    assert decode_body("<html>") is None
    assert is_success({"status": "success"})
    assert not is_success(None)
