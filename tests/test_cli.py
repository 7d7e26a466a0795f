import json

from typer.testing import CliRunner

from pkgmeta import __version__
from pkgmeta.cli.main import app

runner = CliRunner()


def test_version():
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_info_json(xapk_file):
    result = runner.invoke(app, ["info", str(xapk_file), "--json"])

    assert result.exit_code == 0
    record = json.loads(result.stdout)
    assert record["uniqueIdentifier"] == "com.example.app"
    assert record["buildNumber"] == "3"
    assert record["platform"] == "android"
    assert record["icon"].startswith("data:image/png;base64,")


def test_info_json_without_icon(make_ipa):
    result = runner.invoke(app, ["info", str(make_ipa()), "--json", "--no-icon"])

    assert result.exit_code == 0
    record = json.loads(result.stdout)
    assert "icon" not in record
    assert record["deviceFamily"] == ["1", "2"]


def test_info_table(xapk_file):
    result = runner.invoke(app, ["info", str(xapk_file)])

    assert result.exit_code == 0
    assert "com.example.app" in result.stdout
    assert "Example" in result.stdout


def test_info_apk_with_explicit_aapt(apk_file, fake_aapt, tmp_path):
    calls = fake_aapt()
    aapt = tmp_path / "aapt"

    result = runner.invoke(
        app, ["info", str(apk_file), "--aapt", str(aapt), "--timeout", "5", "--json"]
    )

    assert result.exit_code == 0
    assert calls[0][0] == str(aapt)
    assert json.loads(result.stdout)["minimumOsVersion"] == "21"


def test_info_unsupported_format(tmp_path):
    result = runner.invoke(app, ["info", str(tmp_path / "notes.txt")])

    assert result.exit_code == 1


def test_formats_json():
    result = runner.invoke(app, ["formats", "--json"])

    assert result.exit_code == 0
    assert json.loads(result.stdout) == [
        {"extension": ".apk", "platform": "android"},
        {"extension": ".xapk", "platform": "android"},
        {"extension": ".ipa", "platform": "ios"},
    ]


def test_info_table_title_is_not_markup(xapk_file):
    renamed = xapk_file.rename(xapk_file.with_name("[bold]release[/bold].xapk"))

    result = runner.invoke(app, ["info", str(renamed)])

    assert result.exit_code == 0
    assert "[bold]release[/bold].xapk" in result.stdout
