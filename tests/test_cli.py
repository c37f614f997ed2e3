"""
Tests for the CLI entrypoint and the end-to-end run.
"""

import json
import os
from pathlib import Path

import pytest

from spotinstaller import main as main_mod
from spotinstaller.lib.command import CmdResult
from spotinstaller.steps import (
    step_10_check_distro,
    step_20_detect_installed,
    step_30_check_latest,
    step_50_download,
    step_60_install,
)

FULL = "1.2.31.1205.g4d59ad7c"
DEB_NAME = f"spotify-client_{FULL}_amd64.deb"


@pytest.fixture
def paths(home: Path, tmp_path: Path):
    cfg = tmp_path / "config.yaml"
    cfg.write_text(
        "repository_url: https://repo.example/pool/spotify-client/\n"
        f"download_dir: {tmp_path / 'downloads'}\n"
    )
    return {
        "config": str(cfg),
        "state": str(tmp_path / "state.json"),
        "log": str(tmp_path / "spotinstaller.log"),
    }


def _argv(paths, *extra):
    return ["--config", paths["config"], "--state", paths["state"], "--log", paths["log"], *extra]


def test_unsupported_distro_exits_1(paths, monkeypatch, capsys):
    monkeypatch.setattr(step_10_check_distro, "detect_distro", lambda: "unsupported")

    assert main_mod.main(_argv(paths)) == 1

    captured = capsys.readouterr()
    assert "ERROR: Your distribution is not supported yet." in captured.err
    record = json.loads(Path(paths["state"]).read_text())
    assert record["execution"]["outcome"] == "failed"
    assert record["execution"]["errors"][0]["step"] == "10_check_distro"


def test_up_to_date_run(paths, monkeypatch, capsys, listing):
    monkeypatch.setattr(step_10_check_distro, "detect_distro", lambda: "fedora")
    monkeypatch.setattr(step_20_detect_installed, "which", lambda name: "/home/u/.local/bin/spotify")
    monkeypatch.setattr(
        step_20_detect_installed,
        "run_cmd",
        lambda argv, **kw: CmdResult(argv=list(argv), returncode=0, stdout=f"Spotify version {FULL}, Copyright\n", stderr=""),
    )
    monkeypatch.setattr(step_30_check_latest, "fetch_text", lambda url, timeout: listing)

    assert main_mod.main(_argv(paths)) == 0

    out = capsys.readouterr().out
    assert "Latest version: 1.2.31.1205" in out
    assert "You have the latest version of Spotify." in out
    record = json.loads(Path(paths["state"]).read_text())
    assert record["execution"]["outcome"] == "up_to_date"
    assert record["execution"]["ran_steps"] == [
        "10_check_distro",
        "20_detect_installed",
        "30_check_latest",
        "40_decide",
    ]


def test_failing_step_exits_1(paths, capsys):
    class Boom:
        step_id = "99_boom"

        def run(self, state):
            raise RuntimeError("kaboom")

    with pytest.raises(RuntimeError):
        main_mod.run(
            config_path=paths["config"],
            state_path=paths["state"],
            log_path=paths["log"],
            steps=[Boom()],
        )
    record = json.loads(Path(paths["state"]).read_text())
    assert record["execution"]["errors"] == [{"step": "99_boom", "error": "kaboom"}]


def test_missing_config_exits_1(home, tmp_path, capsys):
    rc = main_mod.main(["--config", str(tmp_path / "absent.yaml"), "--log", str(tmp_path / "x.log")])
    assert rc == 1
    assert "ERROR:" in capsys.readouterr().err
    record = json.loads((home / ".local" / "state" / "spotinstaller" / "state.json").read_text())
    assert record["execution"]["outcome"] == "failed"
    assert "absent.yaml" in record["execution"]["errors"][0]["error"]


@pytest.fixture
def fresh_host(monkeypatch, listing, fake_extract):
    """Fedora, Spotify absent, stdin piped, network and dpkg-deb stubbed."""
    downloads = []

    def fake_download(url, dest, timeout, dry_run):
        downloads.append((url, dry_run))
        if not dry_run:
            Path(dest).parent.mkdir(parents=True, exist_ok=True)
            Path(dest).write_bytes(b"deb" * 100)
        return 0 if dry_run else 300

    monkeypatch.setattr(main_mod, "is_interactive", lambda: False)
    monkeypatch.setattr(step_10_check_distro, "detect_distro", lambda: "fedora")
    monkeypatch.setattr(step_20_detect_installed, "which", lambda name: None)
    monkeypatch.setattr(step_30_check_latest, "fetch_text", lambda url, timeout: listing)
    monkeypatch.setattr(step_50_download, "download_file", fake_download)
    monkeypatch.setattr(step_60_install, "extract_deb", fake_extract)
    return downloads


def test_non_interactive_install(paths, home, tmp_path, fresh_host, capsys):
    assert main_mod.main(_argv(paths)) == 0

    out = capsys.readouterr().out
    assert "Running in non-interactive mode. Installing Spotify automatically." in out
    assert "installed/updated successfully" in out

    install = home / ".local" / "spotify"
    assert fresh_host == [(f"https://repo.example/pool/spotify-client/{DEB_NAME}", False)]
    assert not (tmp_path / "downloads" / DEB_NAME).exists()
    assert os.readlink(home / ".local" / "bin" / "spotify") == str(install / "bin" / "spotify")
    assert os.readlink(home / ".local" / "share" / "applications" / "spotify.desktop") == str(
        install / "share" / "spotify" / "spotify.desktop"
    )
    record = json.loads(Path(paths["state"]).read_text())
    assert record["execution"]["outcome"] == "installed"
    assert record["execution"]["ran_steps"][-1] == "70_cleanup"


def test_dry_run_install(paths, home, tmp_path, fresh_host, capsys):
    assert main_mod.main(_argv(paths, "--dry-run")) == 0

    assert fresh_host == [(f"https://repo.example/pool/spotify-client/{DEB_NAME}", True)]
    assert not (home / ".local" / "spotify").exists()
    assert not (home / ".local" / "bin").exists()
    assert "nothing was installed" in capsys.readouterr().out
    record = json.loads(Path(paths["state"]).read_text())
    assert record["execution"]["outcome"] == "dry_run"


def test_malformed_config_exits_1(paths, capsys):
    Path(paths["config"]).write_text("install_path: [unclosed\n")

    assert main_mod.main(_argv(paths)) == 1

    assert "ERROR: Invalid YAML" in capsys.readouterr().err
    record = json.loads(Path(paths["state"]).read_text())
    assert record["execution"]["outcome"] == "failed"
    assert record["execution"]["errors"][0]["step"] is None


def test_malformed_yaml_record_is_replaced(paths, tmp_path, fresh_host):
    state_path = tmp_path / "state.yaml"
    state_path.write_text("a: [unclosed\n")
    argv = ["--config", paths["config"], "--state", str(state_path), "--log", paths["log"]]

    assert main_mod.main(argv) == 0

    assert "outcome: installed" in state_path.read_text()


def test_unwritable_record_does_not_fail_run(paths, tmp_path, fresh_host):
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    argv = ["--config", paths["config"], "--state", str(blocker / "state.json"), "--log", paths["log"]]

    assert main_mod.main(argv) == 0
