"""Tests for the fetch-users entry point."""

from unittest.mock import patch

from pytest import fixture, raises

from sunvoy_tools import LoginRejected
from sunvoy_tools.cli import fetch_users_cli, parse_fetch_users_arguments


@fixture
def argv(monkeypatch, tmp_path):
    monkeypatch.setattr(
        "sys.argv", ["fetch-users", "-q", "--data-dir", str(tmp_path)]
    )


def test_parse_arguments():
    args = parse_fetch_users_arguments(
        ["-v", "--base-url", "https://x.test", "--expected-count", "4"]
    )

    assert args.verbose is True
    assert args.base_url == "https://x.test"
    assert args.expected_count == 4
    assert args.data_dir is None


def test_cli_success_returns_normally(argv, tmp_path):
    with patch("sunvoy_tools.cli.UserExporter") as exporter_cls:
        fetch_users_cli()

    session = exporter_cls.call_args.args[0]
    assert session.config.output_file == tmp_path / "users.json"
    exporter_cls.return_value.export.assert_called_once_with()


def test_cli_credential_failure_exits_nonzero(argv):
    with patch("sunvoy_tools.cli.UserExporter") as exporter_cls:
        exporter_cls.return_value.export.side_effect = LoginRejected(401, "denied")
        with raises(SystemExit) as exc_info:
            fetch_users_cli()

    assert exc_info.value.code == 1
