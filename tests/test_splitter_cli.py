"""Command-line interface: drives a file-backed SQLite ledger end to end."""

import json

import pytest
import yaml

from scripts.splitter_cli import main
from splitter_config import DATABASE_URL_ENV
from tests.conftest import ALICE, BOB, CAROL, MALLORY, OWNER


@pytest.fixture
def cli(tmp_path, monkeypatch, capsys):
    """Run the CLI against a throwaway config set; returns (exit_code, stdout, stderr)."""
    monkeypatch.delenv(DATABASE_URL_ENV, raising=False)
    config = {
        "name": "cli",
        "version": 1,
        "ledger": {
            "ledger_code": "cli",
            "owner": str(OWNER),
            "initial_participants": [str(ALICE)],
        },
        "database": {"url": f"sqlite:///{tmp_path / 'cli.db'}"},
        "logging": {"level": "WARNING"},
    }
    (tmp_path / "cli.yaml").write_text(yaml.safe_dump(config))

    def run(*argv: str):
        code = main(["--config", "cli", "--config-dir", str(tmp_path), *argv])
        out, err = capsys.readouterr()
        return code, out, err

    return run


class TestCli:
    def test_init_and_status(self, cli):
        code, out, _ = cli("init")
        assert code == 0
        assert "opened ledger cli" in out

        code, out, _ = cli("status")
        assert code == 0
        assert f"owner:         {OWNER}" in out
        assert "participants:  1" in out

    def test_split_withdraw_balance(self, cli):
        cli("init")
        code, out, _ = cli("split", "--caller", str(ALICE), str(BOB), str(CAROL), "--value", "10")
        assert code == 0
        assert "credited 5" in out

        code, out, _ = cli("balance", str(BOB))
        assert out.strip() == "5"

        code, out, _ = cli("withdraw", "--caller", str(BOB))
        assert code == 0
        assert out.strip() == f"released 5 to {BOB}"

        code, out, _ = cli("balance", str(BOB))
        assert out.strip() == "0"

    def test_rejected_call_exits_1_with_code(self, cli):
        cli("init")
        code, _, err = cli("pause", "--caller", str(MALLORY))
        assert code == 1
        assert "NOT_OWNER" in err
        assert "Ownable: caller is not the owner" in err

    def test_rejected_call_is_not_persisted(self, cli):
        cli("init")
        cli("split", "--caller", str(ALICE), str(BOB), str(BOB), "--value", "2")
        code, out, _ = cli("events")
        assert code == 0
        assert len(out.strip().splitlines()) == 1

    def test_registry_commands(self, cli):
        cli("init")
        assert cli("add-participant", "--caller", str(OWNER), str(CAROL))[1].strip() == "added"
        assert cli("add-participant", "--caller", str(OWNER), str(CAROL))[1].strip() == (
            "already a participant"
        )
        cli("remove-participant", "--caller", str(OWNER), str(ALICE))
        code, out, _ = cli("participants")
        assert out.split() == [str(CAROL)]

    def test_pause_and_events_since(self, cli):
        cli("init")
        cli("pause", "--caller", str(OWNER))
        code, _, err = cli("split", "--caller", str(ALICE), str(BOB), str(CAROL), "--value", "2")
        assert code == 1
        assert "HALTED" in err
        cli("unpause", "--caller", str(OWNER))

        code, out, _ = cli("events", "--since", "1")
        events = [json.loads(line) for line in out.strip().splitlines()]
        assert [e["event_type"] for e in events] == ["Paused", "Unpaused"]
        assert events[0]["data"] == {"account": str(OWNER)}

    def test_transfer_ownership(self, cli):
        cli("init")
        code, out, _ = cli("transfer-ownership", "--caller", str(OWNER), str(BOB))
        assert code == 0
        assert cli("pause", "--caller", str(BOB))[0] == 0

    def test_unknown_ledger(self, cli):
        code, _, err = cli("status")
        assert code == 1
        assert "LEDGER_NOT_FOUND" in err

    def test_unknown_config_set(self, tmp_path, capsys):
        code = main(["--config", "absent", "--config-dir", str(tmp_path), "status"])
        assert code == 2
        assert "absent" in capsys.readouterr().err

    def test_malformed_config_yaml(self, tmp_path, capsys):
        (tmp_path / "broken.yaml").write_text("ledger: [unclosed\n  owner: {\n")
        code = main(["--config", "broken", "--config-dir", str(tmp_path), "status"])
        assert code == 2
        assert capsys.readouterr().err.startswith("ERROR:")

    def test_malformed_address_is_a_usage_error(self, cli):
        with pytest.raises(SystemExit) as exc_info:
            cli("balance", "0x1234")
        assert exc_info.value.code == 2
