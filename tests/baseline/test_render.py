"""Tests for terminal output helpers."""

from mercator import render


class TestRender:
    def test_markup_is_escaped(self):
        assert render.green("<b>&") == "<ansigreen>&lt;b&gt;&amp;</ansigreen>"

    def test_show_plain_when_captured(self, capsys):
        render.show(f"{render.label('Price')}: {render.red('1 < 2')}")
        assert capsys.readouterr().out.strip() == "Price: 1 < 2"

    def test_info(self, capsys):
        render.info("Limit", 1200, prefix="  ")
        assert capsys.readouterr().out.rstrip() == "  Limit: 1200"

    def test_table(self, capsys):
        render.table([[1, "BUY"], [2, "SELL"]], ["ID", "Side"])
        out = capsys.readouterr().out.splitlines()

        assert out[0].split() == ["ID", "Side"]
        assert out[2].split() == ["2", "SELL"]

    def test_empty_table(self, capsys):
        render.table([], ["ID"])
        assert capsys.readouterr().out == "(no results)\n"

    def test_timestamp(self):
        assert render.timestamp(0) == "1970-01-01T00:00:00Z"

    def test_banner_title(self, capsys):
        render.banner("ledger")
        out = capsys.readouterr().out
        assert "ledger" in out
        assert "a personal CLI for financial things" in out
