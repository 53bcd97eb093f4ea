"""Tests for job envelope helpers (safe parse, failure serialization, validation)."""

import json

import pytest
from bulkbridge.envelope import (
    error_to_dict,
    get_offset,
    require_fields,
    safe_parse,
    serialize,
    serialize_failure,
)
from bulkbridge.errors import InvalidJobError, TransientError


class TestSafeParse:
    """safe_parse decodes JSON and returns anything else unchanged."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ('{"entity": "Campaign"}', {"entity": "Campaign"}),
            ("[1, 2, 3]", [1, 2, 3]),
            ("42", 42),
            ('"quoted"', "quoted"),
            ("null", None),
            ("true", True),
        ],
    )
    def test_decodes_json(self, text, expected):
        assert safe_parse(text) == expected

    @pytest.mark.parametrize("text", ["Campaign", "", "{not json", "Placement Group", "[1,"])
    def test_returns_non_json_text_unchanged(self, text):
        assert safe_parse(text) is text

    def test_returns_decoded_values_unchanged(self):
        job = {"entity": "Ad"}
        assert safe_parse(job) is job

    def test_none_passes_through(self):
        assert safe_parse(None) is None

    def test_decodes_bytes(self):
        assert safe_parse(b'{"offset": 3}') == {"offset": 3}

    def test_invalid_utf8_bytes_returned_unchanged(self):
        data = b"\x80abc"
        assert safe_parse(data) is data

    @pytest.mark.parametrize("text", ["[" * 100000, '{"a":' * 100000])
    def test_too_deeply_nested_text_returned_unchanged(self, text):
        assert safe_parse(text) is text


class TestSerializeFailure:
    """Failure payloads always decode to an envelope with an error field."""

    def test_attaches_error_to_job_in_place(self):
        job = {"entity": "Campaign", "idsToLoad": [1]}
        payload = serialize_failure(job, ValueError("boom"))

        decoded = json.loads(payload)
        assert decoded["entity"] == "Campaign"
        assert decoded["idsToLoad"] == [1]
        assert decoded["error"] == {"type": "ValueError", "message": "boom"}
        assert job["error"] == decoded["error"]

    @pytest.mark.parametrize("job", [None, "Campaign", [1, 2], 7])
    def test_minimal_envelope_when_no_job_object(self, job):
        decoded = json.loads(serialize_failure(job, RuntimeError("bad")))
        assert decoded == {"error": {"type": "RuntimeError", "message": "bad"}}

    def test_unserializable_values_are_stringified(self):
        job = {"feed": object()}
        decoded = json.loads(serialize_failure(job, RuntimeError("x")))
        assert isinstance(decoded["feed"], str)

    def test_circular_job_falls_back_to_minimal_envelope(self):
        job = {"entity": "Ad"}
        job["self"] = job
        decoded = json.loads(serialize_failure(job, RuntimeError("x")))
        assert decoded == {"error": {"type": "RuntimeError", "message": "x"}}

    def test_too_deeply_nested_job_falls_back_to_minimal_envelope(self):
        job = {"entity": "Ad"}
        inner = job
        for _ in range(100000):
            inner["child"] = {}
            inner = inner["child"]
        decoded = json.loads(serialize_failure(job, RuntimeError("x")))
        assert decoded == {"error": {"type": "RuntimeError", "message": "x"}}

    def test_transient_flag(self):
        assert error_to_dict(TransientError("quota")) == {
            "type": "TransientError",
            "message": "quota",
            "transient": True,
        }


class TestRequireFields:

    def test_returns_job_when_fields_present(self):
        job = {"entity": "Ad"}
        assert require_fields(job, "cmLoad", "entity") is job

    def test_missing_field_raises(self):
        with pytest.raises(InvalidJobError, match="cmLoad: job is missing required field\\(s\\): entity"):
            require_fields({}, "cmLoad", "entity")

    def test_null_field_counts_as_missing(self):
        with pytest.raises(InvalidJobError):
            require_fields({"entity": None}, "cmLoad", "entity")

    def test_non_dict_raises(self):
        with pytest.raises(InvalidJobError, match="expected a job object"):
            require_fields("Campaign", "cmLoad", "entity")


class TestGetOffset:

    @pytest.mark.parametrize("job, expected", [({}, 0), ({"offset": None}, 0), ({"offset": 0}, 0), ({"offset": 12}, 12), ({"offset": 3.0}, 3)])
    def test_valid_offsets(self, job, expected):
        assert get_offset(job) == expected

    @pytest.mark.parametrize("offset", [-1, 1.5, "3", True, [1], False, "", []])
    def test_invalid_offsets(self, offset):
        with pytest.raises(InvalidJobError, match="offset"):
            get_offset({"offset": offset})


def test_serialize_is_json():
    assert json.loads(serialize({"jobId": 1})) == {"jobId": 1}
