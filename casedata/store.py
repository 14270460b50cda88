"""
Keyed stores of named fixture values.

A store holds raw values exactly as they were deserialized from a fixture
file and casts them on lookup to whatever type the test asks for. Casting
goes through pydantic, so a stored mapping can be requested as a model, a
dataclass, a TypedDict or a plain builtin.

Two lookup policies exist for each cardinality:

- lenient (``get``, ``get_multiple``): missing or uncastable data yields an
  empty result
- strict (``get_or_throw``, ``get_multiple_or_throw``): uncastable data
  raises, and a missing single value raises
"""

import logging
from collections.abc import Iterator
from dataclasses import is_dataclass
from typing import Any, Protocol, TypeVar, get_origin, is_typeddict

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PydanticSchemaGenerationError,
    RootModel,
    TypeAdapter,
    ValidationError,
)

from casedata.errors import (
    FixtureNotFoundError,
    FixtureTypeMismatchError,
    IllegalArgumentError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Numbers read from JSON/YAML may be requested as strings
SCALAR_CONFIG = ConfigDict(coerce_numbers_to_str=True)


class ValueStore(Protocol):
    """Lookup contract every fixture value store satisfies."""

    def get(self, name: str, target_type: type[T]) -> T | None: ...

    def get_or_throw(self, name: str, target_type: type[T]) -> T: ...

    def get_multiple(self, name: str, target_type: type[T]) -> list[T]: ...

    def get_multiple_or_throw(self, name: str, target_type: type[T]) -> list[T]: ...


def cast_value(name: str, raw: Any, target_type: Any) -> Any:
    """
    Cast a raw fixture value to ``target_type``.

    Values that already are instances of a plain target class are returned
    unchanged; everything else is validated by a pydantic TypeAdapter in lax
    mode. Numbers coerce to strings unless the target carries its own
    pydantic config (models, dataclasses, TypedDicts).

    Raises:
        FixtureTypeMismatchError: If the value cannot be cast, or pydantic
            cannot build a schema for ``target_type``.
    """
    if get_origin(target_type) is None and isinstance(target_type, type):
        if isinstance(raw, target_type):
            return raw

    try:
        adapter: TypeAdapter[Any] = _adapter_for(target_type)
        return adapter.validate_python(raw)
    except PydanticSchemaGenerationError as e:
        raise FixtureTypeMismatchError(name, target_type, "unsupported target type") from e
    except ValidationError as e:
        first = e.errors()[0]["msg"] if e.error_count() else "validation failed"
        raise FixtureTypeMismatchError(name, target_type, first) from e


def _adapter_for(target_type: Any) -> TypeAdapter[Any]:
    if isinstance(target_type, type) and get_origin(target_type) is None:
        if issubclass(target_type, BaseModel) or is_dataclass(target_type):
            return TypeAdapter(target_type)
    if is_typeddict(target_type):
        return TypeAdapter(target_type)
    return TypeAdapter(target_type, config=SCALAR_CONFIG)


class FixtureData(RootModel[dict[str, Any]]):
    """
    A keyed collection of named, raw fixture values.

    Validates directly from the mapping found in a fixture file, so
    ``FixtureData({"createPlatform": {"name": "x"}})`` and the ``input:``
    section of a YAML document are interchangeable.

    Example:
        >>> store = FixtureData({"count": "3", "tags": ["a", 1, None]})
        >>> store.get("count", int)
        3
        >>> store.get_multiple("tags", str)
        ['a', '1']
    """

    model_config = ConfigDict(frozen=True)

    root: dict[str, Any] = Field(default_factory=dict)

    # Frozen, but the raw values are arbitrary and may be unhashable
    __hash__ = None  # type: ignore[assignment]

    # -------------------------------------------------------------------------
    # Single-value lookups
    # -------------------------------------------------------------------------

    def get(self, name: str, target_type: type[T]) -> T | None:
        """
        Look up a single value, returning None when missing or uncastable.

        Args:
            name: Key of the value in this store.
            target_type: Type to cast the stored value to.

        Returns:
            The cast value, or None.
        """
        _require_type(target_type)
        if name not in self.root:
            return None
        try:
            value: T = cast_value(name, self.root[name], target_type)
        except FixtureTypeMismatchError as e:
            logger.debug("Ignoring uncastable fixture value: %s", e)
            return None
        return value

    def get_or_throw(self, name: str, target_type: type[T]) -> T:
        """
        Look up a single value, failing when missing or uncastable.

        A stored null counts as missing unless the target type accepts None.

        Raises:
            FixtureNotFoundError: If ``name`` is not in the store, or is null.
            FixtureTypeMismatchError: If the value cannot be cast.
        """
        _require_type(target_type)
        if name not in self.root:
            raise FixtureNotFoundError(name)
        raw = self.root[name]
        try:
            value: T = cast_value(name, raw, target_type)
        except FixtureTypeMismatchError as e:
            if raw is None:
                raise FixtureNotFoundError(name) from e
            raise
        return value

    # -------------------------------------------------------------------------
    # Collection lookups
    # -------------------------------------------------------------------------

    def get_multiple(self, name: str, target_type: type[T]) -> list[T]:
        """
        Look up a collection, dropping elements that cannot be cast.

        A stored non-list value is treated as a one-element collection.
        A missing key yields an empty list.
        """
        _require_type(target_type)
        result: list[T] = []
        for index, raw in enumerate(self._elements(name)):
            try:
                result.append(cast_value(f"{name}[{index}]", raw, target_type))
            except FixtureTypeMismatchError as e:
                logger.debug("Dropping uncastable fixture element: %s", e)
        return result

    def get_multiple_or_throw(self, name: str, target_type: type[T]) -> list[T]:
        """
        Look up a collection, failing if any element cannot be cast.

        A missing key yields an empty list.

        Raises:
            FixtureTypeMismatchError: On the first element that cannot be cast.
        """
        _require_type(target_type)
        return [
            cast_value(f"{name}[{index}]", raw, target_type)
            for index, raw in enumerate(self._elements(name))
        ]

    # -------------------------------------------------------------------------
    # Read helpers
    # -------------------------------------------------------------------------

    def raw(self, name: str) -> Any:
        """Return the stored value for ``name`` without casting.

        Raises:
            FixtureNotFoundError: If ``name`` is not in the store.
        """
        if name not in self.root:
            raise FixtureNotFoundError(name)
        return self.root[name]

    def keys(self) -> list[str]:
        """Return the stored keys in definition order."""
        return list(self.root)

    def _elements(self, name: str) -> list[Any]:
        if name not in self.root:
            return []
        raw = self.root[name]
        if isinstance(raw, list | tuple):
            return list(raw)
        return [raw]

    def __contains__(self, name: object) -> bool:
        return name in self.root

    def __len__(self) -> int:
        return len(self.root)

    def __iter__(self) -> Iterator[str]:  # type: ignore[override]
        return iter(self.root)


def _require_type(target_type: Any) -> None:
    if target_type is None:
        raise IllegalArgumentError("A target type is required for fixture lookups")
