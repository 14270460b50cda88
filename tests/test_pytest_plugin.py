"""
Tests for casedata.pytest_plugin module.

Runs small generated test suites through pytester.
"""

import textwrap

import pytest

CONFTEST = 'pytest_plugins = ["casedata.pytest_plugin"]\n'

PLATFORM_FIXTURES = textwrap.dedent(
    """
    cases:
      - testName: test_creates_platform
        input:
          createPlatform: {name: demo}
        mock:
          output:
            platform: {id: 7, name: demo}
      - testName: renamedCase
        input:
          count: "3"
    """
)


@pytest.fixture
def suite(pytester: pytest.Pytester) -> pytest.Pytester:
    pytester.makeconftest(CONFTEST)
    fixtures = pytester.mkdir("fixtures")
    (fixtures / "test_platform.yaml").write_text(PLATFORM_FIXTURES)
    return pytester


class TestCaseDataFixture:
    """Tests for the case_data fixture."""

    def test_case_named_after_test(self, suite: pytest.Pytester) -> None:
        suite.makepyfile(
            test_platform="""
            from pydantic import BaseModel

            class CreatePlatform(BaseModel):
                name: str

            class Platform(BaseModel):
                id: int
                name: str

            def test_creates_platform(case_data):
                assert case_data.name == "test_creates_platform"
                assert case_data.get_input_or_throw(CreatePlatform).name == "demo"
                assert case_data.get_mock_output_or_throw(Platform).id == 7
            """
        )
        result = suite.runpytest()
        result.assert_outcomes(passed=1)

    def test_marker_selects_case(self, suite: pytest.Pytester) -> None:
        suite.makepyfile(
            test_platform="""
            import pytest

            @pytest.mark.casedata("renamedCase")
            def test_counts(case_data):
                assert case_data.get_input_or_throw(int, "count") == 3
            """
        )
        result = suite.runpytest()
        result.assert_outcomes(passed=1)

    def test_marker_selects_file(self, suite: pytest.Pytester) -> None:
        (suite.path / "fixtures" / "shared.json").write_text(
            '[{"testName": "test_shared", "input": {"flag": true}}]'
        )
        suite.makepyfile(
            test_other="""
            import pytest

            @pytest.mark.casedata(file="shared.json")
            def test_shared(case_data):
                assert case_data.get_input(bool, "flag") is True
            """
        )
        result = suite.runpytest()
        result.assert_outcomes(passed=1)

    def test_missing_case_errors(self, suite: pytest.Pytester) -> None:
        suite.makepyfile(
            test_platform="""
            def test_unknown(case_data):
                pass
            """
        )
        result = suite.runpytest()
        result.assert_outcomes(errors=1)
        result.stdout.fnmatch_lines(["*FixtureNotFoundError*"])

    def test_missing_file_errors(self, suite: pytest.Pytester) -> None:
        suite.makepyfile(
            test_unmapped="""
            def test_anything(case_data):
                pass
            """
        )
        result = suite.runpytest()
        result.assert_outcomes(errors=1)
        result.stdout.fnmatch_lines(["*No fixture file for module 'test_unmapped'*"])

    def test_parametrized_test_uses_original_name(self, suite: pytest.Pytester) -> None:
        suite.makepyfile(
            test_platform="""
            import pytest

            @pytest.mark.parametrize("n", [1, 2])
            def test_creates_platform(case_data, n):
                assert case_data.name == "test_creates_platform"
            """
        )
        result = suite.runpytest()
        result.assert_outcomes(passed=2)


class TestFixturesDirectory:
    """Tests for locating the fixtures directory."""

    def test_ini_option(self, pytester: pytest.Pytester) -> None:
        pytester.makeconftest(CONFTEST)
        pytester.makeini("[pytest]\ncasedata_dir = recorded\n")
        recorded = pytester.mkdir("recorded")
        (recorded / "test_ini.yaml").write_text("testName: test_ini\ninput: {x: 1}\n")
        pytester.makepyfile(
            test_ini="""
            def test_ini(case_data):
                assert case_data.get_input(int, "x") == 1
            """
        )
        result = pytester.runpytest()
        result.assert_outcomes(passed=1)

    def test_config_file(self, pytester: pytest.Pytester) -> None:
        pytester.makeconftest(CONFTEST)
        pytester.makefile(".yaml", casedata="fixtures_dir: data/cases\n")
        cases = pytester.mkdir("data") / "cases"
        cases.mkdir()
        (cases / "test_cfg.json").write_text('{"testName": "test_cfg"}')
        pytester.makepyfile(
            test_cfg="""
            def test_cfg(case_data, fixture_catalog):
                assert "test_cfg" in fixture_catalog
                assert case_data.input is None
            """
        )
        result = pytester.runpytest()
        result.assert_outcomes(passed=1)

    def test_marker_registered(self, pytester: pytest.Pytester) -> None:
        pytester.makeconftest(CONFTEST)
        result = pytester.runpytest("--markers")
        result.stdout.fnmatch_lines(["*casedata(name=None, file=None)*"])
