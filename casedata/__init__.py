"""
casedata - recorded input and mock data for automated test cases.

Usage:
    case = FixtureLoader().load_case("fixtures/platforms.yaml", "createsPlatform")
    request = case.get_input_or_throw(CreatePlatform)     # key: createPlatform
    reply = case.get_mock_output(Platform, "platformReply")
"""

from casedata.config import CaseDataConfig, ConfigLoader
from casedata.errors import (
    CaseDataError,
    ErrorCode,
    FixtureFileError,
    FixtureNotFoundError,
    FixtureTypeMismatchError,
    IllegalArgumentError,
    UnsupportedNamespaceError,
)
from casedata.loader import FixtureCatalog, FixtureLoader
from casedata.models import FixtureCase, MockData, Namespace, VariableDefinition
from casedata.naming import infer_key
from casedata.store import FixtureData, ValueStore

__version__ = "0.1.0"

__all__ = [
    # Models
    "FixtureCase",
    "MockData",
    "Namespace",
    "VariableDefinition",
    # Stores
    "FixtureData",
    "ValueStore",
    "infer_key",
    # Loading and configuration
    "CaseDataConfig",
    "ConfigLoader",
    "FixtureCatalog",
    "FixtureLoader",
    # Errors
    "CaseDataError",
    "ErrorCode",
    "FixtureFileError",
    "FixtureNotFoundError",
    "FixtureTypeMismatchError",
    "IllegalArgumentError",
    "UnsupportedNamespaceError",
]
