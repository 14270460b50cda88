"""
Loading test-case fixture data from YAML and JSON files.

A fixture file holds one test case, a list of test cases, or a mapping
with a ``cases`` list:

    cases:
      - testName: createsPlatform
        input:
          createPlatform: {name: demo}
        mock:
          output:
            platform: {id: 7, name: demo}
"""

import json
import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from casedata.config import CaseDataConfig
from casedata.errors import FixtureFileError, FixtureNotFoundError
from casedata.models import FixtureCase

logger = logging.getLogger(__name__)


# =============================================================================
# Fixture Catalog
# =============================================================================


class FixtureCatalog:
    """Read-only collection of FixtureCase instances keyed by test name.

    Example:
        >>> catalog = FixtureCatalog([FixtureCase(name="createsPlatform")])
        >>> catalog.get("createsPlatform")
        FixtureCase(name='createsPlatform')
    """

    def __init__(self, cases: list[FixtureCase] | None = None) -> None:
        """Build a catalog; a later case replaces an earlier one with the same name."""
        self._cases: dict[str, FixtureCase] = {}
        for case in cases or []:
            if case.name in self._cases:
                logger.warning("Test case '%s' is defined more than once; last wins", case.name)
            self._cases[case.name] = case

    def get(self, name: str) -> FixtureCase:
        """Retrieve a test case by name.

        Args:
            name: The name of the test case to retrieve.

        Returns:
            The FixtureCase with the given name.

        Raises:
            FixtureNotFoundError: If no test case with the given name exists.
        """
        if name not in self._cases:
            raise FixtureNotFoundError(name)
        return self._cases[name]

    def has(self, name: str) -> bool:
        """Check if a test case is in the catalog."""
        return name in self._cases

    def list_all(self) -> list[FixtureCase]:
        """List all test cases.

        Returns:
            A copy of the list of all FixtureCases.
            Modifications to this list do not affect catalog state.
        """
        return list(self._cases.values())

    def merge(self, other: "FixtureCatalog") -> "FixtureCatalog":
        """Return a new catalog with ``other``'s cases layered over this one's."""
        return FixtureCatalog([*self.list_all(), *other.list_all()])

    def __len__(self) -> int:
        return len(self._cases)

    def __contains__(self, name: object) -> bool:
        return name in self._cases

    def __iter__(self) -> Iterator[str]:
        return iter(self._cases)

    def __repr__(self) -> str:
        return f"FixtureCatalog({len(self._cases)} cases)"


# =============================================================================
# Fixture Loader
# =============================================================================


class FixtureLoader:
    """Parse fixture documents into catalogs of test cases."""

    def __init__(self, config: CaseDataConfig | None = None) -> None:
        self.config = config or CaseDataConfig()

    def from_dict(self, data: Any, source: str = "<dict>") -> FixtureCatalog:
        """
        Build a catalog from an already-parsed fixture document.

        Args:
            data: A case mapping, a list of case mappings, a mapping with a
                ``cases`` list, or None for an empty document.
            source: Label used in error messages.

        Raises:
            FixtureFileError: If the document does not describe test cases.
        """
        if data is None:
            return FixtureCatalog()

        if isinstance(data, dict) and "cases" in data:
            items = data["cases"]
        elif isinstance(data, dict):
            items = [data]
        else:
            items = data

        if not isinstance(items, list):
            raise FixtureFileError(
                source, "expected a test case, a list of test cases or a 'cases' list"
            )

        try:
            cases = [FixtureCase.model_validate(item) for item in items]
        except ValidationError as e:
            raise FixtureFileError(source, f"{e.error_count()} validation error(s)") from e

        logger.debug("Loaded %d test case(s) from %s", len(cases), source)
        return FixtureCatalog(cases)

    def from_yaml(self, text: str, source: str = "<yaml>") -> FixtureCatalog:
        """Parse a YAML fixture document."""
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise FixtureFileError(source, f"invalid YAML: {e}") from e
        return self.from_dict(data, source)

    def from_json(self, text: str, source: str = "<json>") -> FixtureCatalog:
        """Parse a JSON fixture document."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise FixtureFileError(source, f"invalid JSON: {e}") from e
        return self.from_dict(data, source)

    def load_file(self, path: str | Path) -> FixtureCatalog:
        """
        Load a fixture file, choosing the parser by suffix.

        Raises:
            FileNotFoundError: If the file does not exist.
            FixtureFileError: If the suffix is unsupported or parsing fails.
        """
        path = Path(path)
        if not path.is_file():
            msg = f"Fixture file not found: {path}"
            raise FileNotFoundError(msg)

        suffix = path.suffix.lower()
        text = path.read_text(encoding=self.config.encoding)
        if suffix == ".json":
            return self.from_json(text, str(path))
        if suffix in (".yaml", ".yml"):
            return self.from_yaml(text, str(path))
        raise FixtureFileError(str(path), f"unsupported file type '{suffix}'")

    def load_case(self, path: str | Path, name: str) -> FixtureCase:
        """Load a single named test case from a fixture file."""
        return self.load_file(path).get(name)

    def load_directory(self, directory: str | Path | None = None) -> FixtureCatalog:
        """
        Load every fixture file in a directory (non-recursive, sorted by name).

        Defaults to the configured ``fixtures_dir``.
        """
        root = Path(directory) if directory is not None else self.config.fixtures_dir
        if not root.is_dir():
            msg = f"Fixture directory not found: {root}"
            raise FileNotFoundError(msg)

        catalog = FixtureCatalog()
        for path in sorted(root.iterdir()):
            if path.is_file() and path.suffix.lower() in self.config.suffixes:
                catalog = catalog.merge(self.load_file(path))
        return catalog

    def find_file(self, stem: str, directory: str | Path | None = None) -> Path | None:
        """Return the first fixture file named ``stem`` plus a configured suffix."""
        root = Path(directory) if directory is not None else self.config.fixtures_dir
        for suffix in self.config.suffixes:
            candidate = root / f"{stem}{suffix}"
            if candidate.is_file():
                return candidate
        return None
