from pathlib import Path

from typer.testing import CliRunner

import macshift.cli as cli_mod
from macshift.cli import app


def _config(tmp_path: Path, address: str = "random") -> Path:
    yml = tmp_path / "macshift.yml"
    yml.write_text(
        f"interface:\n  name: eth9\n  hw: 00:11:22:33:44:55\nmac_changer:\n  address: {address}\n",
        encoding="utf-8",
    )
    return yml


def test_version_command():
    runner = CliRunner()
    result = runner.invoke(app, ["version"], prog_name="macshift")
    assert result.exit_code == 0
    assert "macshift" in result.stdout


def test_config_validate_ok(tmp_path):
    runner = CliRunner()
    result = runner.invoke(app, ["config-validate", str(_config(tmp_path))])
    assert result.exit_code == 0
    assert "Config OK" in result.stdout
    assert "eth9" in result.stdout


def test_config_validate_bad(tmp_path):
    bad = _config(tmp_path, address="zz")
    runner = CliRunner()
    result = runner.invoke(app, ["config-validate", str(bad)])
    assert result.exit_code == 1
    assert "Config validation failed" in result.stdout


def test_modules_lists_verbs(tmp_path):
    runner = CliRunner()
    result = runner.invoke(app, ["modules", "--config", str(_config(tmp_path))])
    assert result.exit_code == 0
    assert "Change active interface mac address." in " ".join(result.stdout.split())
    assert "mac.changer.address" in result.stdout


def test_eval_on_with_restore(tmp_path, monkeypatch, runner):
    monkeypatch.setattr(cli_mod, "run_command", runner)
    cli = CliRunner()
    result = cli.invoke(
        app,
        [
            "eval",
            "--config", str(_config(tmp_path, "11:22:33:44:55:66")),
            "--os", "linux",
            "--restore",
            "-e", "mac.changer on",
        ],
    )
    assert result.exit_code == 0, result.stdout
    assert runner.calls == [
        ("ifconfig", ["eth9", "hw", "ether", "11:22:33:44:55:66"]),
        ("ifconfig", ["eth9", "hw", "ether", "00:11:22:33:44:55"]),
    ]
    assert "00:11:22:33:44:55" in result.stdout


def test_eval_iface_and_hw_override(tmp_path, monkeypatch, runner):
    monkeypatch.setattr(cli_mod, "run_command", runner)
    cli = CliRunner()
    result = cli.invoke(
        app,
        [
            "eval",
            "--config", str(_config(tmp_path)),
            "--os", "darwin",
            "-i", "en0",
            "--hw", "AA:AA:AA:AA:AA:AA",
            "-e", "set mac.changer.address 12:34:56:78:9a:bc; mac.changer on",
        ],
    )
    assert result.exit_code == 0, result.stdout
    assert runner.calls == [("ifconfig", ["en0", "ether", "12:34:56:78:9a:bc"])]
    assert "12:34:56:78:9a:bc" in result.stdout


def test_eval_command_failure(tmp_path, monkeypatch, failing_runner):
    monkeypatch.setattr(cli_mod, "run_command", failing_runner)
    cli = CliRunner()
    result = cli.invoke(
        app,
        ["eval", "--config", str(_config(tmp_path)), "--os", "linux", "-e", "mac.changer on; mac.changer off"],
    )
    assert result.exit_code == 1
    assert "Operation not permitted" in " ".join(result.stdout.split())
    assert len(failing_runner.calls) == 1


def test_eval_unsupported_platform(tmp_path, monkeypatch, runner):
    monkeypatch.setattr(cli_mod, "run_command", runner)
    cli = CliRunner()
    result = cli.invoke(
        app,
        ["eval", "--config", str(_config(tmp_path)), "--os", "plan9", "-e", "mac.changer on"],
    )
    assert result.exit_code == 1
    assert "plan9" in result.stdout
    assert runner.calls == []


def test_eval_dry_run_does_not_execute(tmp_path, monkeypatch, runner):
    monkeypatch.setattr(cli_mod, "run_command", runner)
    cli = CliRunner()
    result = cli.invoke(
        app,
        ["eval", "--config", str(_config(tmp_path)), "--os", "linux", "--dry-run", "-e", "mac.changer on"],
    )
    assert result.exit_code == 0, result.stdout
    assert runner.calls == []
