"""
Tests for casedata.naming module.

Covers key inference from classes, generics and invalid inputs.
"""

from dataclasses import dataclass

import pytest
from pydantic import BaseModel

from casedata.errors import ErrorCode, IllegalArgumentError
from casedata.naming import infer_key, uncapitalize


class CreatePlatform(BaseModel):
    name: str


@dataclass
class URLConfig:
    url: str


class TestUncapitalize:
    """Tests for uncapitalize helper."""

    def test_lowers_first_character_only(self) -> None:
        assert uncapitalize("CreatePlatform") == "createPlatform"

    def test_keeps_already_lower(self) -> None:
        assert uncapitalize("platform") == "platform"

    def test_empty_string(self) -> None:
        assert uncapitalize("") == ""

    def test_single_character(self) -> None:
        assert uncapitalize("X") == "x"


class TestInferKey:
    """Tests for infer_key."""

    def test_pydantic_model(self) -> None:
        """Model class names become lower-camel keys."""
        assert infer_key(CreatePlatform) == "createPlatform"

    def test_dataclass(self) -> None:
        """Only the first character changes, acronyms are kept."""
        assert infer_key(URLConfig) == "uRLConfig"

    def test_builtin(self) -> None:
        assert infer_key(int) == "int"
        assert infer_key(dict) == "dict"

    def test_generic_alias_uses_origin(self) -> None:
        """Parameterized generics infer from their origin type."""
        assert infer_key(list[int]) == "list"
        assert infer_key(dict[str, CreatePlatform]) == "dict"

    def test_nested_class_uses_simple_name(self) -> None:
        """Enclosing class names are not part of the key."""

        class Outer:
            class InnerRequest:
                pass

        assert infer_key(Outer.InnerRequest) == "innerRequest"

    def test_is_idempotent(self) -> None:
        assert infer_key(CreatePlatform) == infer_key(CreatePlatform)

    def test_none_raises_illegal_argument(self) -> None:
        with pytest.raises(IllegalArgumentError) as exc_info:
            infer_key(None)
        assert exc_info.value.code == ErrorCode.ILLEGAL_ARGUMENT

    def test_nameless_object_raises_illegal_argument(self) -> None:
        with pytest.raises(IllegalArgumentError):
            infer_key(object())
