"""Tests for ServiceResult and ServiceError."""

import json

import pytest
from pydantic import ValidationError

from linkctl.domain.document import Document
from linkctl.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="add_link", data={"name": "gh"})
        assert result.ok is True
        assert result.op == "add_link"
        assert result.data == {"name": "gh"}
        assert result.warnings == []
        assert result.error is None
        assert result.meta is None

    def test_error_construction(self) -> None:
        error = ServiceError(code="NOT_FOUND", message="link 'x' not found")
        result = ServiceResult(ok=False, op="edit_link", error=error)
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"

    def test_json_serialization(self) -> None:
        result = ServiceResult(
            ok=True,
            op="show",
            data={"counts": {"links": 1}},
            meta={"backend": "toml"},
        )
        parsed = json.loads(result.model_dump_json())
        assert parsed["ok"] is True
        assert parsed["data"]["counts"]["links"] == 1
        assert parsed["meta"]["backend"] == "toml"

    def test_document_payload_rebuilt(self) -> None:
        doc = Document(aliases={"gh": "github"}, links={"github": "https://github.com"})
        result = ServiceResult(ok=True, op="add_alias", data={"document": doc.to_dict()})
        assert result.document == doc

    def test_document_absent(self) -> None:
        assert ServiceResult(ok=True, op="resolve", data={"uri": "https://x"}).document is None

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="show")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]


class TestServiceError:
    def test_detail_defaults_empty(self) -> None:
        assert ServiceError(code="X", message="m").detail == {}

    def test_with_detail(self) -> None:
        error = ServiceError(
            code="DANGLING_REFERENCE",
            message="alias 'x' points to 'gone' which is not in [links]",
            detail={"name": "x", "target": "gone"},
        )
        assert error.detail["target"] == "gone"
