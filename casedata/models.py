"""
Pydantic models for per-test fixture data.

A FixtureCase captures the recorded data for a single test case: named
input values, plus optional mock input/output values used to stub the
dependencies the code under test calls. Tests pull values out by explicit
key or by a key inferred from the requested type, either one value or a
collection, leniently (missing -> empty) or strictly (missing -> error).

Follows patterns established in casedata.store.
"""

import logging
from enum import Enum
from typing import Any, TypeVar

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from casedata.errors import (
    FixtureNotFoundError,
    IllegalArgumentError,
    UnsupportedNamespaceError,
)
from casedata.naming import infer_key
from casedata.store import FixtureData

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Namespace(str, Enum):
    """Sections of a test case a value can be looked up in.

    - INPUT: the test's primary input values
    - MOCK_INPUT: arguments expected by a stubbed dependency
    - MOCK_OUTPUT: values returned by a stubbed dependency
    """

    INPUT = "input"
    MOCK_INPUT = "mock_input"
    MOCK_OUTPUT = "mock_output"

    @classmethod
    def coerce(cls, value: Any) -> "Namespace":
        """Convert a member or its string value to a Namespace.

        Raises:
            UnsupportedNamespaceError: If ``value`` names no namespace.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError as e:
            raise UnsupportedNamespaceError(value) from e


class VariableDefinition(BaseModel):
    """A reusable variable declared by a test case.

    Carried through as-is; casedata never substitutes or evaluates it.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    value: Any = Field(default=None, description="Declared value of the variable")
    type: str | None = Field(default=None, description="Optional type hint for the value")
    description: str = Field(default="", description="Human-readable description")


class MockData(BaseModel):
    """Recorded traffic for a stubbed dependency.

    Either side may be absent independently; absence means no mock data is
    defined for that side.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    input: FixtureData | None = Field(
        default=None, description="Request/arguments supplied to the stubbed dependency"
    )
    output: FixtureData | None = Field(
        default=None, description="Response/return value of the stubbed dependency"
    )

    # Frozen, but holds unhashable stores
    __hash__ = None  # type: ignore[assignment]


# =============================================================================
# FixtureCase
# =============================================================================


class FixtureCase(BaseModel):
    """
    Recorded fixture data for a single test case.

    Equality, hashing and display use ``name`` only.

    Example:
        >>> case = FixtureCase(name="createsPlatform", input={"createPlatform": {"id": 1}})
        >>> case.get_input(dict, "createPlatform")
        {'id': 1}
        >>> case.get_mock_output(dict, "platform") is None
        True
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    name: str = Field(
        ...,
        alias="testName",
        min_length=1,
        description="Name of the test case this data belongs to",
    )
    variables: dict[str, VariableDefinition] = Field(
        default_factory=dict,
        description="Reusable variable definitions (not interpreted)",
    )
    input: FixtureData | None = Field(default=None, description="Primary input values")
    mock: MockData | None = Field(default=None, description="Mock input/output values")

    @field_validator("name")
    @classmethod
    def name_is_valid(cls, v: str) -> str:
        """Validate that name is not whitespace-only."""
        if not v.strip():
            raise ValueError("Test case name must not be empty or whitespace-only")
        return v

    @field_validator("variables", mode="before")
    @classmethod
    def variables_default(cls, v: Any) -> Any:
        """Treat an explicit null as no variables."""
        return {} if v is None else v

    # -------------------------------------------------------------------------
    # Routing
    # -------------------------------------------------------------------------

    def locate(self, namespace: Namespace | str) -> FixtureData | None:
        """
        Find the store backing a namespace.

        Args:
            namespace: A Namespace member or its string value.

        Returns:
            The store, or None if this case defines no data for the namespace.

        Raises:
            UnsupportedNamespaceError: If ``namespace`` is not a Namespace.
        """
        ns = Namespace.coerce(namespace)
        if ns is Namespace.INPUT:
            store = self.input
        elif ns is Namespace.MOCK_INPUT:
            store = self.mock.input if self.mock is not None else None
        elif ns is Namespace.MOCK_OUTPUT:
            store = self.mock.output if self.mock is not None else None
        else:
            raise UnsupportedNamespaceError(ns)

        if store is None:
            logger.debug("Test case '%s' defines no %s data", self.name, ns.value)
        return store

    def _resolve(
        self,
        namespace: Namespace | str | None,
        name: str | None,
        target_type: Any,
        *,
        multiple: bool,
        strict: bool,
    ) -> Any:
        """Single implementation behind every lookup entry point."""
        ns = Namespace.coerce(namespace) if namespace is not None else None
        if ns is None or target_type is None:
            if strict:
                raise IllegalArgumentError("Fixture lookups require a namespace and a target type")
            return [] if multiple else None

        key = name if name is not None else infer_key(target_type)
        store = self.locate(ns)

        if store is None:
            if strict and not multiple:
                raise FixtureNotFoundError(key, ns.value)
            return [] if multiple else None

        if multiple:
            if strict:
                return store.get_multiple_or_throw(key, target_type)
            return store.get_multiple(key, target_type)
        if not strict:
            return store.get(key, target_type)
        try:
            return store.get_or_throw(key, target_type)
        except FixtureNotFoundError as e:
            raise FixtureNotFoundError(key, ns.value) from e

    # -------------------------------------------------------------------------
    # Namespace-parameterized primitives
    # -------------------------------------------------------------------------

    def get(
        self, namespace: Namespace | str | None, name: str | None, target_type: type[T] | None
    ) -> T | None:
        """
        Look up a single value; missing or uncastable data yields None.

        Args:
            namespace: Section to look in.
            name: Key of the value; inferred from ``target_type`` when None.
            target_type: Type to cast the value to.

        Returns:
            The value, or None. Also None when namespace or type is None.

        Raises:
            UnsupportedNamespaceError: If ``namespace`` is not a Namespace.
        """
        result: T | None = self._resolve(namespace, name, target_type, multiple=False, strict=False)
        return result

    def get_or_throw(
        self, namespace: Namespace | str | None, name: str | None, target_type: type[T] | None
    ) -> T:
        """
        Look up a single value; missing or uncastable data raises.

        A namespace with no data behaves like a namespace without the key.

        Raises:
            IllegalArgumentError: If namespace or target type is None.
            UnsupportedNamespaceError: If ``namespace`` is not a Namespace.
            FixtureNotFoundError: If no value exists for the key.
            FixtureTypeMismatchError: If the value cannot be cast.
        """
        result: T = self._resolve(namespace, name, target_type, multiple=False, strict=True)
        return result

    def get_multiple(
        self, namespace: Namespace | str | None, name: str | None, target_type: type[T] | None
    ) -> list[T]:
        """
        Look up a collection; elements that cannot be cast are dropped.

        Returns an empty list when nothing is stored or namespace/type is None.

        Raises:
            UnsupportedNamespaceError: If ``namespace`` is not a Namespace.
        """
        result: list[T] = self._resolve(namespace, name, target_type, multiple=True, strict=False)
        return result

    def get_multiple_or_throw(
        self, namespace: Namespace | str | None, name: str | None, target_type: type[T] | None
    ) -> list[T]:
        """
        Look up a collection; any element that cannot be cast fails the call.

        Returns an empty list when nothing is stored for the key or the
        namespace has no data.

        Raises:
            IllegalArgumentError: If namespace or target type is None.
            UnsupportedNamespaceError: If ``namespace`` is not a Namespace.
            FixtureTypeMismatchError: If any element cannot be cast.
        """
        result: list[T] = self._resolve(namespace, name, target_type, multiple=True, strict=True)
        return result

    # -------------------------------------------------------------------------
    # Input
    # -------------------------------------------------------------------------

    def get_input(self, target_type: type[T], name: str | None = None) -> T | None:
        """Lenient single input lookup."""
        return self.get(Namespace.INPUT, name, target_type)

    def get_input_or_throw(self, target_type: type[T], name: str | None = None) -> T:
        """Strict single input lookup."""
        return self.get_or_throw(Namespace.INPUT, name, target_type)

    def get_multiple_inputs(self, target_type: type[T], name: str | None = None) -> list[T]:
        """Lenient input collection lookup."""
        return self.get_multiple(Namespace.INPUT, name, target_type)

    def get_multiple_inputs_or_throw(
        self, target_type: type[T], name: str | None = None
    ) -> list[T]:
        """Strict input collection lookup."""
        return self.get_multiple_or_throw(Namespace.INPUT, name, target_type)

    # -------------------------------------------------------------------------
    # Mock input
    # -------------------------------------------------------------------------

    def get_mock_input(self, target_type: type[T], name: str | None = None) -> T | None:
        return self.get(Namespace.MOCK_INPUT, name, target_type)

    def get_mock_input_or_throw(self, target_type: type[T], name: str | None = None) -> T:
        return self.get_or_throw(Namespace.MOCK_INPUT, name, target_type)

    def get_multiple_mock_inputs(self, target_type: type[T], name: str | None = None) -> list[T]:
        return self.get_multiple(Namespace.MOCK_INPUT, name, target_type)

    def get_multiple_mock_inputs_or_throw(
        self, target_type: type[T], name: str | None = None
    ) -> list[T]:
        return self.get_multiple_or_throw(Namespace.MOCK_INPUT, name, target_type)

    # -------------------------------------------------------------------------
    # Mock output
    # -------------------------------------------------------------------------

    def get_mock_output(self, target_type: type[T], name: str | None = None) -> T | None:
        return self.get(Namespace.MOCK_OUTPUT, name, target_type)

    def get_mock_output_or_throw(self, target_type: type[T], name: str | None = None) -> T:
        return self.get_or_throw(Namespace.MOCK_OUTPUT, name, target_type)

    def get_multiple_mock_outputs(self, target_type: type[T], name: str | None = None) -> list[T]:
        return self.get_multiple(Namespace.MOCK_OUTPUT, name, target_type)

    def get_multiple_mock_outputs_or_throw(
        self, target_type: type[T], name: str | None = None
    ) -> list[T]:
        return self.get_multiple_or_throw(Namespace.MOCK_OUTPUT, name, target_type)

    # -------------------------------------------------------------------------
    # Identity and serialization
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FixtureCase):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr_args__(self) -> Any:
        return [("name", self.name)]

    def to_yaml(self) -> str:
        """Serialize to YAML format."""
        result: str = yaml.dump(
            self.model_dump(mode="json", by_alias=True),
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )
        return result

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "FixtureCase":
        """Deserialize from YAML format."""
        data = yaml.safe_load(yaml_str)
        return cls.model_validate(data)
