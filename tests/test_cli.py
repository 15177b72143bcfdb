"""CLI commands against a seeded catalog."""

import logging

import pytest

from battcat.app import cli
from battcat.app.cli import build_parser, main


def _run(capsys, *argv):
    code = main(list(argv))
    return code, capsys.readouterr().out


class TestParser:
    def test_defaults(self):
        args = build_parser().parse_args(["list"])
        assert (args.sort, args.direction) == ("usable_capacity_kwh", "desc")

    def test_rejects_unknown_sort_key(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["list", "--sort", "weight"])

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestCommands:
    def test_list_default_order(self, seeded_db, capsys):
        code, out = _run(capsys, "--db", str(seeded_db), "list")
        assert code == 0
        lines = out.splitlines()
        assert "Tesla Powerwall 3" in lines[1]
        assert "Enphase Energy IQ Battery 5P" in lines[-1]

    def test_list_by_price_ascending(self, seeded_db, capsys):
        code, out = _run(capsys, "--db", str(seeded_db), "list", "--sort", "price", "--direction", "asc")
        lines = out.splitlines()[1:]
        assert "IQ Battery 5P" in lines[0]
        assert "sonnenBatterie 10" in lines[1]
        assert "Powerwall 3" in lines[2]
        assert "eco Gen 3" in lines[3]

    def test_show(self, seeded_db, capsys):
        code, out = _run(capsys, "--db", str(seeded_db), "show", "tesla-powerwall-3")
        assert code == 0
        assert out.startswith("Tesla Powerwall 3\n")
        assert "$9,300" in out

    def test_show_unknown(self, seeded_db, capsys):
        code, out = _run(capsys, "--db", str(seeded_db), "show", "nope")
        assert code == 1
        assert out == ""

    def test_brand(self, seeded_db, capsys):
        code, out = _run(capsys, "--db", str(seeded_db), "brand", "sonnen")
        assert code == 0
        assert "2 battery(ies)" in out

    def test_brand_unknown(self, seeded_db, capsys):
        code, _ = _run(capsys, "--db", str(seeded_db), "brand", "nope")
        assert code == 1

    def test_brands(self, seeded_db, capsys):
        code, out = _run(capsys, "--db", str(seeded_db), "brands")
        assert code == 0
        assert "Enphase Energy" in out

    def test_seed(self, tmp_path, seed_files, capsys):
        brands, batteries = seed_files
        db = tmp_path / "fresh.db"
        code, out = _run(
            capsys, "--db", str(db), "seed", "--brands", str(brands), "--batteries", str(batteries)
        )
        assert code == 0
        assert "Seeded 3 brands and 4 batteries" in out
        assert db.exists()

    def test_scan_delegates_to_job(self, seeded_db, monkeypatch):
        calls = []
        monkeypatch.setattr(cli, "run_scan_job", lambda **kw: calls.append(kw) or 0)

        assert main(["--db", str(seeded_db), "scan"]) == 0
        assert calls == [{"db_path": seeded_db}]

    def test_verbosity_flags_set_console_level(self, seeded_db, monkeypatch, capsys):
        levels = []
        monkeypatch.setattr(cli, "set_console_level", levels.append)

        main(["-q", "--db", str(seeded_db), "brands"])
        main(["-v", "--db", str(seeded_db), "brands"])

        assert levels == [logging.WARNING, logging.DEBUG]
