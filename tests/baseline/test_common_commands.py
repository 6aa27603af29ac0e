"""Tests for the commands installed in every scope: help, set, exit, quit."""

import pytest

from mercator.engine.errors import ExitRequested


def run(env, capsys, line):
    env.execute(line)
    return capsys.readouterr().out


class TestHelp:
    def test_scope_help(self, env, capsys):
        out = run(env, capsys, "help")

        assert "A command line tool for managing monetary assets" in out
        assert "Available Commands:" in out
        for name in ("use", "help", "set", "exit", "quit"):
            assert f"  {name} " in out

    def test_command_help(self, env, capsys):
        out = run(env, capsys, "help use")
        assert "binance" in out
        assert "Utilities for managing shopify account" in out

    def test_unknown_topic(self, env, log_capture):
        env.execute("help nothing")
        assert 'unknown command "nothing" for "mercator"' in log_capture.getvalue()

    def test_help_flag(self, binance_env, capsys):
        out = run(binance_env, capsys, "shares --help")

        assert "binance shares [flags]" in out
        assert "-i, --inv float" in out
        assert "(required)" in out

    def test_short_help_flag(self, binance_env, capsys):
        assert "Usage:" in run(binance_env, capsys, "depth -h")

    def test_every_scope_has_common_commands(self, binance_env):
        names = {cmd.name for cmd in binance_env.currentScope().rootCommand().children}
        assert {"help", "set", "exit", "quit"} <= names


class TestUse:
    def test_lists_scopes(self, env, capsys):
        out = run(env, capsys, "use")
        assert "binance" in out
        assert "shopify" in out
        assert env.depth == 1

    def test_unknown_scope(self, env, log_capture):
        env.execute("use nowhere")
        assert "unknown scope: nowhere" in log_capture.getvalue()

    def test_extra_arguments(self, env, log_capture):
        env.execute("use shopify now")

        assert env.depth == 1
        assert "accepts 0 arg(s), received 1" in log_capture.getvalue()


class TestSet:
    def test_empty(self, env, log_capture):
        env.execute("set")
        assert "No settings in this session yet." in log_capture.getvalue()

    def test_list(self, env, capsys):
        env.execute("use shopify")
        out = run(env, capsys, "set")
        assert "shopify.conv: 0.03" in out
        assert "shopify.cpm: 6.2" in out

    def test_show_one(self, env, capsys):
        env.execute("use shopify")
        assert run(env, capsys, "set shopify.ctr").strip() == "shopify.ctr: 0.0259"

    def test_change(self, env):
        env.execute("use shopify")
        env.execute("set shopify.ctr 0.05")
        assert env.settings["shopify.ctr"] == "0.05"

    def test_unknown_key(self, env, log_capture):
        env.execute("set nothing 1")

        assert "unknown setting: nothing" in log_capture.getvalue()
        assert env.settings == {}

    def test_too_many_arguments(self, env, log_capture):
        env.execute("set a b c")
        assert "accepts between 0 and 2 arg(s), received 3" in log_capture.getvalue()


class TestExitQuit:
    def test_exit_pops_one_scope(self, env):
        env.execute("use shopify")
        env.execute("exit")
        assert env.depth == 1

    def test_exit_rejects_arguments(self, env, log_capture):
        env.execute("exit now")
        assert "accepts 0 arg(s), received 1" in log_capture.getvalue()

    def test_quit(self, env):
        env.execute("use shopify")
        with pytest.raises(ExitRequested) as exc:
            env.execute("quit")

        assert exc.value.code == 0
