"""Tests for command trees: flag parsing, arity rules, dispatch and help."""

import pytest

from mercator.engine.command import (
    CommandNode,
    Flag,
    exactArgs,
    maximumArgs,
    minimumArgs,
    noArgs,
    parseBool,
    rangeArgs,
)
from mercator.engine.errors import ArityError, CommandNotFound, FlagError


class Recorder:
    """Run body that keeps every Invocation it receives."""

    def __init__(self):
        self.invocations = []

    def __call__(self, inv):
        self.invocations.append(inv)

    @property
    def last(self):
        return self.invocations[-1]


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def tree(recorder):
    root = CommandNode(name="root", short="test root")
    root.add(
        CommandNode(
            name="order",
            short="Place an order",
            flags=[
                Flag("qty", float, 1.0, "Quantity", short="q", required=True),
                Flag("limit", int, 50, "Limit"),
                Flag("dry", bool, False, "Dry run", short="d"),
                Flag("note", str, "", "Note"),
            ],
            validate=maximumArgs(2),
            run=recorder,
        ),
        CommandNode(
            name="group",
            short="A group",
            children=[CommandNode(name="leaf", short="A leaf", validate=noArgs, run=recorder)],
        ),
    )
    return root


class TestFlags:
    def test_defaults_applied(self, tree, recorder):
        tree.execute(None, ["order", "--qty", "2"])

        assert recorder.last.flags == {"qty": 2.0, "limit": 50, "dry": False, "note": ""}
        assert recorder.last.changed == {"qty"}
        assert recorder.last.isSet("qty")
        assert not recorder.last.isSet("limit")

    def test_equals_form(self, tree, recorder):
        tree.execute(None, ["order", "--qty=3.5", "--limit=7"])
        assert recorder.last.flag("qty") == 3.5
        assert recorder.last.flag("limit") == 7

    def test_shorthand(self, tree, recorder):
        tree.execute(None, ["order", "-q", "4", "-d"])
        assert recorder.last.flag("qty") == 4.0
        assert recorder.last.flag("dry") is True

    def test_bool_explicit_value(self, tree, recorder):
        tree.execute(None, ["order", "--qty", "1", "--dry=false"])
        assert recorder.last.flag("dry") is False

    def test_negative_number_is_positional(self, tree, recorder):
        tree.execute(None, ["order", "--qty", "1", "-5"])
        assert recorder.last.args == ["-5"]

    def test_negative_number_as_flag_value(self, tree, recorder):
        tree.execute(None, ["order", "--qty", "-2.5"])
        assert recorder.last.flag("qty") == -2.5

    def test_double_dash_ends_flags(self, tree, recorder):
        tree.execute(None, ["order", "--qty", "1", "--", "--limit", "x"])
        assert recorder.last.args == ["--limit", "x"]
        assert recorder.last.flag("limit") == 50

    def test_flags_and_args_interleave(self, tree, recorder):
        tree.execute(None, ["order", "A", "--qty", "1", "B"])
        assert recorder.last.args == ["A", "B"]

    def test_values_do_not_leak_between_runs(self, tree, recorder):
        tree.execute(None, ["order", "--qty", "1", "--limit", "9"])
        tree.execute(None, ["order", "--qty", "1"])
        assert recorder.last.flag("limit") == 50

    def test_unknown_flag(self, tree):
        with pytest.raises(FlagError, match="unknown flag: --size"):
            tree.execute(None, ["order", "--qty", "1", "--size", "2"])

    def test_unknown_shorthand(self, tree):
        with pytest.raises(FlagError, match="unknown shorthand flag: 'z' in -z"):
            tree.execute(None, ["order", "-z"])

    def test_missing_value(self, tree):
        with pytest.raises(FlagError, match="flag needs an argument: --qty"):
            tree.execute(None, ["order", "--qty"])

    def test_invalid_value(self, tree):
        with pytest.raises(FlagError) as exc:
            tree.execute(None, ["order", "--qty", "1", "--limit", "many"])

        assert str(exc.value) == 'invalid argument "many" for "--limit" flag'

    def test_non_finite_float_rejected(self, tree):
        with pytest.raises(FlagError):
            tree.execute(None, ["order", "--qty", "nan"])

    def test_required_flag_missing(self, tree, recorder):
        with pytest.raises(FlagError) as exc:
            tree.execute(None, ["order"])

        assert str(exc.value) == 'required flag(s) "qty" not set'
        assert recorder.invocations == []

    def test_required_checked_before_arity(self, tree):
        with pytest.raises(FlagError):
            tree.execute(None, ["order", "a", "b", "c"])

    def test_parse_bool(self):
        assert parseBool("YES") is True
        assert parseBool("0") is False
        with pytest.raises(ValueError):
            parseBool("maybe")


class TestArity:
    def test_no_args(self):
        noArgs([])
        with pytest.raises(ArityError, match=r"accepts 0 arg\(s\), received 1"):
            noArgs(["x"])

    def test_exact(self):
        exactArgs(2)(["a", "b"])
        with pytest.raises(ArityError, match=r"accepts 2 arg\(s\), received 1"):
            exactArgs(2)(["a"])

    def test_minimum(self):
        minimumArgs(1)(["a", "b"])
        with pytest.raises(ArityError, match=r"requires at least 1 arg\(s\), only received 0"):
            minimumArgs(1)([])

    def test_maximum(self, tree):
        with pytest.raises(ArityError, match=r"accepts at most 2 arg\(s\), received 3"):
            tree.execute(None, ["order", "--qty", "1", "a", "b", "c"])

    def test_range(self):
        rangeArgs(0, 2)([])
        rangeArgs(0, 2)(["a", "b"])
        with pytest.raises(ArityError, match=r"accepts between 0 and 2 arg\(s\), received 3"):
            rangeArgs(0, 2)(["a", "b", "c"])


class TestDispatch:
    def test_nested_command(self, tree, recorder):
        tree.execute(None, ["group", "leaf"])
        assert recorder.last.command.path == "root group leaf"

    def test_unknown_subcommand(self, tree):
        with pytest.raises(CommandNotFound) as exc:
            tree.execute(None, ["group", "twig"])

        assert str(exc.value) == 'unknown command "twig" for "group"'

    def test_group_without_body_prints_help(self, tree, capsys):
        tree.execute(None, ["group"])
        out = capsys.readouterr().out
        assert "Available Commands:" in out
        assert "leaf" in out

    def test_help_flag(self, tree, recorder, capsys):
        tree.execute(None, ["order", "--help"])
        out = capsys.readouterr().out

        assert recorder.invocations == []
        assert "root order [flags]" in out
        assert "-q, --qty float" in out
        assert "(required)" in out
        assert "(default 50)" in out

    def test_resolve(self, tree):
        node, rest = tree.resolve(["group", "leaf", "extra"])
        assert node.name == "leaf"
        assert rest == ["extra"]


class TestConstruction:
    def test_duplicate_child_rejected(self):
        root = CommandNode(name="root", children=[CommandNode(name="a")])
        with pytest.raises(ValueError, match="Duplicate command: a"):
            root.add(CommandNode(name="a"))

    def test_duplicate_flag_rejected(self):
        with pytest.raises(ValueError, match="Duplicate flag: --x"):
            CommandNode(name="c", flags=[Flag("x"), Flag("x")])

    def test_name_must_be_one_word(self):
        with pytest.raises(ValueError):
            CommandNode(name="two words")

    def test_children_get_parent(self):
        child = CommandNode(name="child")
        root = CommandNode(name="root", children=[child])
        assert child.parent is root
