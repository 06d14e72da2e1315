"""Tests for the user export pipeline."""

import json
import logging
from dataclasses import replace
from unittest.mock import Mock

from pytest import fixture, raises

from sunvoy_tools import (
    AuthFlow,
    HttpError,
    NetworkError,
    NonceNotFound,
    ResourceFetcher,
    UserExporter,
    merge_users,
    write_users,
)
from sunvoy_tools.result import Failure, Success, attempt, value_or


@fixture
def auth():
    auth = Mock(spec=AuthFlow)
    auth.get_credentials.return_value = "sid=abc"
    return auth


@fixture
def fetcher():
    return Mock(spec=ResourceFetcher)


@fixture
def exporter(session, auth, fetcher) -> UserExporter:
    return UserExporter(session, auth=auth, fetcher=fetcher)


def test_users_failure_keeps_current_user(exporter, fetcher, config):
    fetcher.fetch_users.side_effect = HttpError(500, "server error")
    fetcher.fetch_current_user.return_value = {"id": "42"}

    exporter.export()

    assert json.loads(config.output_file.read_text()) == [{"id": "42"}]


def test_both_fetches_empty_writes_empty_array(exporter, fetcher, config):
    fetcher.fetch_users.return_value = []
    fetcher.fetch_current_user.side_effect = NetworkError("connection refused")

    assert exporter.export() == []
    assert config.output_file.read_text() == "[]"


def test_current_user_appended_after_list(exporter, fetcher, auth, config):
    fetcher.fetch_users.return_value = [{"id": "1"}, {"id": "2"}]
    fetcher.fetch_current_user.return_value = {"id": "3"}

    result = exporter.export()

    assert result == [{"id": "1"}, {"id": "2"}, {"id": "3"}]
    fetcher.fetch_users.assert_called_once_with("sid=abc")
    fetcher.fetch_current_user.assert_called_once_with("sid=abc")
    assert config.output_file.read_text() == json.dumps(result, indent=2)


def test_count_mismatch_only_warns(exporter, fetcher, config, caplog):
    fetcher.fetch_users.return_value = [{"id": "1"}]
    fetcher.fetch_current_user.return_value = {}

    with caplog.at_level(logging.WARNING):
        exporter.export()

    assert "Expected 10 users, got 1" in caplog.text
    assert config.output_file.exists()


def test_expected_count_zero_disables_warning(session, auth, fetcher, caplog):
    session.config = replace(session.config, expected_user_count=0)
    fetcher.fetch_users.return_value = []
    fetcher.fetch_current_user.return_value = {}

    with caplog.at_level(logging.WARNING):
        UserExporter(session, auth=auth, fetcher=fetcher).export()

    assert "Expected" not in caplog.text


def test_credential_failure_is_fatal(exporter, auth, fetcher, config):
    auth.get_credentials.side_effect = NonceNotFound("Nonce not found in login page")

    with raises(NonceNotFound):
        exporter.export()

    fetcher.fetch_users.assert_not_called()
    assert not config.output_file.exists()


def test_merge_users_filters_empty_entries():
    users = [{"id": "1"}, {}, "junk", {"id": "2"}]

    assert merge_users(users, {}) == [{"id": "1"}, {"id": "2"}]


def test_write_users_creates_parent(tmp_path):
    path = tmp_path / "out" / "users.json"

    write_users([{"id": "1"}], path)

    assert path.read_text() == '[\n  {\n    "id": "1"\n  }\n]'


def test_attempt_wraps_success_and_failure():
    error = HttpError(404, "not found")

    def failing(_):
        raise error

    assert attempt("op", lambda x: x * 2, 21) == Success(42)
    failure = attempt("op", failing, None)
    assert failure == Failure(error, "op")
    assert value_or(failure, []) == []
    assert value_or(Success([1]), []) == [1]


def test_attempt_does_not_swallow_unexpected_errors():
    def broken():
        raise RuntimeError("bug")

    with raises(RuntimeError):
        attempt("op", broken)


def test_public_names_importable():
    import sunvoy_tools

    for name in sunvoy_tools.__all__:
        assert hasattr(sunvoy_tools, name), name
