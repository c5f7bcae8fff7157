from unittest.mock import patch

import pytest
import requests
from typer.testing import CliRunner

from normcheck import __version__
from normcheck.__main__ import main
from normcheck.cli import app

runner = CliRunner()


@pytest.fixture
def config_file(tmp_path, range_file):
    path = tmp_path / "normcheck.yaml"
    path.write_text(f"ranges:\n  file: {range_file}\nnumbers:\n  currency_decimals: 2\n")
    return path


def test_help():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "validate and normalize" in result.output


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert f"normcheck {__version__}" in result.output


def test_main_is_callable():
    assert callable(main)


def test_integer_table():
    result = runner.invoke(app, ["integer", "1_234"])
    assert result.exit_code == 0
    assert "1,234" in result.output
    assert "1_234" in result.output


def test_rejection_exits_1():
    result = runner.invoke(app, ["ssn", "12345"])
    assert result.exit_code == 1
    assert "too few digits" in result.output


def test_error_text_is_not_markup():
    result = runner.invoke(app, ["email", "[a@b.com"])
    assert result.exit_code == 1
    assert "[ or ] present but not matched" in result.output


def test_isbn_with_range_file(config_file):
    result = runner.invoke(app, ["--config", str(config_file), "isbn", "0306406152", "--kind", "13"])
    assert result.exit_code == 0
    assert "978-0-306-40615-7" in result.output


def test_currency_uses_configured_decimals(config_file):
    result = runner.invoke(app, ["--config", str(config_file), "currency", "$5"])
    assert result.exit_code == 0
    assert "$5.00" in result.output


def test_date_limits():
    result = runner.invoke(app, ["date", "1/5/24", "--min", "2024-02-01"])
    assert result.exit_code == 1
    assert "before 2024-02-01" in result.output


def test_phone_locale():
    ok = runner.invoke(app, ["phone", "(212) 555-0100", "--locale", "en_US"])
    assert ok.exit_code == 0
    assert "+1(212)555-0100" in ok.output

    bad = runner.invoke(app, ["phone", "01 23 45 67 89", "--locale", "fr_FR"])
    assert bad.exit_code == 1
    assert "not implemented" in bad.output


def test_name_without_abbreviation():
    result = runner.invoke(app, ["name", "j r r", "--no-abbreviation"])
    assert result.exit_code == 0
    assert "J R R" in result.output


def test_ranges_save(config_file, range_file, tmp_path):
    target = tmp_path / "saved.xml"
    result = runner.invoke(app, ["--config", str(config_file), "ranges", "--save", str(target)])
    assert result.exit_code == 0
    assert "5 registration groups" in result.output
    assert target.read_bytes() == range_file.read_bytes()


def test_ranges_download_failure():
    with patch("normcheck.isbn_ranges.requests.get", side_effect=requests.ConnectionError("down")):
        result = runner.invoke(app, ["ranges"])
    assert result.exit_code == 1
    assert "not available" in result.output


@pytest.mark.parametrize(
    "args, expected",
    [
        (["integer", "1_234"], "1,234"),
        (["double", "1,234.5"], "1234.5"),
        (["currency", "$5"], "$5.00"),
        (["percentage", "0.5"], "50%"),
        (["date", "Jan 5, 2024"], "2024-01-05"),
        (["name", "j r r"], "J.R.R."),
        (["email", "John Doe <john.doe@example.com>"], "john.doe@example.com"),
        (["phone", "(212) 555-0100", "--locale", "en_US"], "+1(212)555-0100"),
        (["ssn", "123456789"], "123-45-6789"),
        (["isbn", "0306406152", "--kind", "13"], "978-0-306-40615-7"),
        (["card", "4111 1111 1111 1111"], "4111111111111111"),
        (["ranges"], "5 registration groups"),
    ],
)
def test_every_command_reads_settings_from_context(config_file, args, expected):
    result = runner.invoke(app, ["--config", str(config_file), *args])
    assert result.exit_code == 0
    assert expected in result.output


def test_verbose_logs_validation():
    with patch("normcheck.cli.log") as log:
        result = runner.invoke(app, ["--verbose", "ssn", "123456789"])
    assert result.exit_code == 0
    log.info.assert_any_call("validated", kind="ssn", machine="123456789")
