"""CLI smoke tests using typer's CliRunner."""

import json

from typer.testing import CliRunner

from casper import __version__
from casper.catalog import Casper
from casper.cli.app import app

runner = CliRunner()

CLEAN = """\
- id: property.heavy
  name: Heavy
  property:
    description: Heavy.
- id: weapon.club
  name: Club
  item: {}
  properties:
    - ref: heavy
"""

BROKEN = """\
- id: armor.bad
  name: Bad
  armor: {}
"""


def _data_dir(tmp_path, *texts: str):
    data = tmp_path / "data"
    data.mkdir()
    for i, text in enumerate(texts):
        (data / f"part{i}.yaml").write_text(text)
    return data


class TestBuildCommand:
    def test_build_json(self, tmp_path):
        data = _data_dir(tmp_path, CLEAN)
        result = runner.invoke(app, ["--json", "build", str(data)])

        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["entities"] == 2
        assert payload["failed"] == 0
        assert {"Type": "item", "Count": "1"} in payload["types"]

    def test_build_writes_catalog(self, tmp_path):
        data = _data_dir(tmp_path, CLEAN)
        output = tmp_path / "out" / "manifest.json"
        result = runner.invoke(app, ["build", str(data), "-o", str(output)])

        assert result.exit_code == 0
        catalog = Casper.from_json(output.read_text())
        assert "weapon.club" in catalog

    def test_errors_tolerated_by_default(self, tmp_path):
        data = _data_dir(tmp_path, CLEAN, BROKEN)
        result = runner.invoke(app, ["build", str(data)])
        assert result.exit_code == 0

    def test_fail_on_error(self, tmp_path):
        data = _data_dir(tmp_path, CLEAN, BROKEN)
        result = runner.invoke(app, ["build", str(data), "--fail-on-error"])
        assert result.exit_code == 1

    def test_strict(self, tmp_path):
        data = _data_dir(tmp_path, "- id: rule.x\n  name: X\n  colour: red\n")
        result = runner.invoke(app, ["build", str(data), "--strict", "--fail-on-error"])
        assert result.exit_code == 1

    def test_error_log_file(self, tmp_path, monkeypatch):
        data = _data_dir(tmp_path, CLEAN, BROKEN)
        log = tmp_path / "errors.json"
        monkeypatch.setenv("CASPER_ERROR_LOGS", str(log))

        result = runner.invoke(app, ["build", str(data)])

        assert result.exit_code == 0
        assert list(json.loads(log.read_text())) == ["armor.bad"]

    def test_configured_data_dirs(self, tmp_path, monkeypatch):
        data = _data_dir(tmp_path, CLEAN)
        monkeypatch.setenv("CASPER_DATA_DIRS", str(data))
        result = runner.invoke(app, ["--json", "build"])

        assert result.exit_code == 0
        assert json.loads(result.stdout)["entities"] == 2

    def test_missing_directory(self, tmp_path):
        result = runner.invoke(app, ["build", str(tmp_path / "nope")])
        assert result.exit_code == 3


class TestGetCommand:
    def _catalog(self, tmp_path):
        data = _data_dir(tmp_path, CLEAN)
        output = tmp_path / "manifest.json"
        runner.invoke(app, ["build", str(data), "-o", str(output)])
        return output

    def test_get_from_manifest(self, tmp_path):
        manifest = self._catalog(tmp_path)
        result = runner.invoke(app, ["--json", "get", "weapon", "club", "-m", str(manifest)])

        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["id"] == "weapon.club"
        assert payload["entity"]["type"] == "item"

    def test_get_resolves_configured_data(self, tmp_path, monkeypatch):
        data = _data_dir(tmp_path, CLEAN)
        monkeypatch.setenv("CASPER_DATA_DIRS", str(data))
        result = runner.invoke(app, ["get", "property.heavy"])

        assert result.exit_code == 0
        assert "Heavy" in result.output

    def test_get_missing_entity(self, tmp_path):
        manifest = self._catalog(tmp_path)
        result = runner.invoke(app, ["get", "weapon.none", "-m", str(manifest)])
        assert result.exit_code == 3

    def test_get_missing_manifest(self, tmp_path):
        result = runner.invoke(app, ["get", "x", "-m", str(tmp_path / "none.json")])
        assert result.exit_code == 3


class TestOrderCommand:
    def test_order(self):
        result = runner.invoke(app, ["order"])
        assert result.exit_code == 0
        assert "properties" in result.output

    def test_order_json(self):
        result = runner.invoke(app, ["--json", "order"])
        components = json.loads(result.stdout)["components"]
        assert components[0]["Component"] == "id"
        assert components[-1]["Component"] == "type"


class TestConfigCommand:
    def test_config_show(self):
        result = runner.invoke(app, ["config", "show"])
        assert result.exit_code == 0
        assert "data_dirs" in result.output

    def test_config_show_json(self, monkeypatch):
        monkeypatch.setenv("CASPER_BRIEF_LENGTH", "42")
        result = runner.invoke(app, ["--json", "config", "show"])
        assert json.loads(result.stdout)["config"]["brief_length"] == 42

    def test_config_unknown_action(self):
        result = runner.invoke(app, ["config", "unknown_action"])
        assert result.exit_code == 1
        assert "Unknown action" in result.output


class TestVersionFlag:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output
