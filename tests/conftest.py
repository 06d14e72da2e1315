"""Global test fixtures for Sunvoy tools."""

from pathlib import Path
from unittest.mock import Mock

import pytest
from pytest import fixture

from sunvoy_tools import Config, SunvoySession


def pytest_addoption(parser):
    """Add custom pytest command line options."""
    parser.addoption(
        "--e2e",
        action="store_true",
        default=False,
        help="run end-to-end tests",
    )


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "e2e: mark test as end-to-end test")


def pytest_collection_modifyitems(config, items):
    """Skip end-to-end tests unless --e2e option is used."""
    if config.getoption("--e2e"):
        return

    skip_e2e = pytest.mark.skip(reason="need --e2e option to run")
    for item in items:
        if "e2e" in item.keywords:
            item.add_marker(skip_e2e)


@fixture(scope="session")
def fixtures_dir() -> Path:
    """Return path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@fixture(scope="session")
def login_html(fixtures_dir) -> str:
    return (fixtures_dir / "login.html").read_text()


@fixture(scope="session")
def tokens_html(fixtures_dir) -> str:
    return (fixtures_dir / "tokens.html").read_text()


@fixture
def config(tmp_path) -> Config:
    """Config pointing at a fake host with files under tmp_path."""
    return Config.for_host(
        "https://sunvoy.example.com", "https://api.sunvoy.example.com", tmp_path
    )


@fixture
def session(config) -> SunvoySession:
    """Real SunvoySession whose fetch method is a Mock."""
    session = SunvoySession(config)
    session.fetch = Mock()
    return session


def make_response(status_code=200, text="", headers=None, json_data=None) -> Mock:
    """Create a mock requests.Response."""
    response = Mock()
    response.status_code = status_code
    response.text = text
    response.headers = headers or {}
    response.url = "https://sunvoy.example.com/"
    response.reason = "OK"
    if json_data is None:
        response.json.side_effect = ValueError("Expecting value")
    else:
        response.json.return_value = json_data
    return response


@fixture
def response_factory():
    """Return the make_response helper."""
    return make_response
