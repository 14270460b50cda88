"""
Lookup-key inference.

A fixture value stored under ``createPlatform`` can be requested as
``CreatePlatform`` without spelling the key: the key is the simple type
name with its first character lower-cased.
"""

from typing import Any, get_origin

from casedata.errors import IllegalArgumentError


def uncapitalize(text: str) -> str:
    """Lower-case only the first character of ``text``."""
    if not text:
        return text
    return text[0].lower() + text[1:]


def infer_key(target_type: Any) -> str:
    """
    Derive the default fixture key for a target type.

    Args:
        target_type: A class, or a parameterized generic such as ``list[int]``
            (which resolves to its origin, ``list``).

    Returns:
        The type's simple name with the first character lower-cased.

    Raises:
        IllegalArgumentError: If ``target_type`` is None or has no name.

    Example:
        >>> class CreatePlatform: ...
        >>> infer_key(CreatePlatform)
        'createPlatform'
    """
    if target_type is None:
        raise IllegalArgumentError("Cannot infer a fixture key without a target type")

    origin = get_origin(target_type)
    named = origin if origin is not None else target_type

    simple_name = getattr(named, "__name__", None)
    if not isinstance(simple_name, str) or not simple_name:
        raise IllegalArgumentError(f"Cannot infer a fixture key from {target_type!r}")

    # __qualname__ may be dotted for nested classes; __name__ never is
    return uncapitalize(simple_name)
