"""Tests for the JSON-lines protocol message types."""

from __future__ import annotations

import json

import pytest

from teddytutor.server.protocol import Request, Response


class TestRequest:
    def test_from_dict_full(self):
        data = {"id": 1, "method": "getSettings", "params": {"level": "easy"}}
        req = Request.from_dict(data)
        assert req.id == 1
        assert req.method == "getSettings"
        assert req.params == {"level": "easy"}

    def test_from_dict_no_params(self):
        req = Request.from_dict({"id": 2, "method": "listLevels"})
        assert req.id == 2
        assert req.params == {}

    def test_null_params(self):
        req = Request.from_dict({"id": 3, "method": "listLevels", "params": None})
        assert req.params == {}

    def test_missing_method(self):
        with pytest.raises(ValueError, match="missing 'method'"):
            Request.from_dict({"id": 4})


class TestResponse:
    def test_success_json_line(self):
        resp = Response(id=1, result={"level": "medium"})
        line = resp.to_json_line()
        assert line.endswith("\n")
        assert json.loads(line) == {"id": 1, "result": {"level": "medium"}}

    def test_error_json_line(self):
        parsed = json.loads(Response(id=2, error="Unknown method: foo").to_json_line())
        assert parsed == {"id": 2, "error": "Unknown method: foo"}
        assert "result" not in parsed

    def test_failure_from_exception(self):
        resp = Response.failure(5, ValueError("Unknown difficulty level: 'x'"))
        assert resp.result is None
        assert json.loads(resp.to_json_line()) == {"id": 5, "error": "Unknown difficulty level: 'x'"}

    def test_null_result(self):
        parsed = json.loads(Response(id=3, result=None).to_json_line())
        assert parsed["result"] is None
