"""
pytest integration for casedata.

Enable it from a conftest.py::

    pytest_plugins = ["casedata.pytest_plugin"]

Fixture files are looked up by test module name: tests in
``tests/test_platform.py`` read ``<fixtures dir>/test_platform.yaml`` (or
``.yml`` / ``.json``). The ``case_data`` fixture returns the test case named
after the requesting test function, unless a ``casedata`` marker says
otherwise::

    @pytest.mark.casedata("createsPlatform", file="platforms.yaml")
    def test_create(case_data):
        request = case_data.get_input_or_throw(CreatePlatform)
"""

from pathlib import Path

import pytest

from casedata.config import ConfigLoader
from casedata.loader import FixtureCatalog, FixtureLoader
from casedata.models import FixtureCase

INI_FIXTURES_DIR = "casedata_dir"


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addini(
        INI_FIXTURES_DIR,
        help="Directory holding casedata fixture files (relative to rootdir)",
        default="",
    )


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "casedata(name=None, file=None): select the fixture test case and/or file",
    )


def fixtures_dir_for(config: pytest.Config) -> Path:
    """Resolve the fixtures directory from the ini option or casedata.yaml."""
    configured = str(config.getini(INI_FIXTURES_DIR) or "")
    if configured:
        return Path(config.rootpath) / configured
    return ConfigLoader.discover(config.rootpath).fixtures_dir


def _marker_kwargs(request: pytest.FixtureRequest) -> dict[str, str | None]:
    marker = request.node.get_closest_marker("casedata")
    if marker is None:
        return {"name": None, "file": None}
    name = marker.args[0] if marker.args else marker.kwargs.get("name")
    return {"name": name, "file": marker.kwargs.get("file")}


@pytest.fixture
def casedata_loader(request: pytest.FixtureRequest) -> FixtureLoader:
    """Loader configured from casedata.yaml and the ``casedata_dir`` ini option."""
    config = ConfigLoader.discover(request.config.rootpath)
    config = config.model_copy(update={"fixtures_dir": fixtures_dir_for(request.config)})
    return FixtureLoader(config)


@pytest.fixture
def fixture_catalog(
    request: pytest.FixtureRequest, casedata_loader: FixtureLoader
) -> FixtureCatalog:
    """Catalog for the requesting test module (or the marker's ``file``)."""
    fixtures_dir = casedata_loader.config.fixtures_dir
    file_name = _marker_kwargs(request)["file"]
    if file_name:
        return casedata_loader.load_file(fixtures_dir / file_name)

    stem = request.path.stem
    path = casedata_loader.find_file(stem)
    if path is None:
        msg = f"No fixture file for module '{stem}' in {fixtures_dir}"
        raise FileNotFoundError(msg)
    return casedata_loader.load_file(path)


@pytest.fixture
def case_data(request: pytest.FixtureRequest, fixture_catalog: FixtureCatalog) -> FixtureCase:
    """FixtureCase for the requesting test."""
    name = _marker_kwargs(request)["name"] or request.node.originalname
    return fixture_catalog.get(name)
