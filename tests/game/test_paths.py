"""Unit tests for path resolution."""

import pytest

from game.paths import ROOT, from_display, join, parent, resolve, to_display


class TestResolve:
    """Test resolve() rules in priority order."""

    @pytest.mark.parametrize(
        "token, current, expected",
        [
            ("/", ("a", "b"), ROOT),
            ("..", ("a", "b"), ("a",)),
            ("..", ROOT, ROOT),
            ("/x/y", ("a",), ("x", "y")),
            ("//x///y/", ("a",), ("x", "y")),
            ("c", ("a", "b"), ("a", "b", "c")),
            ("c", ROOT, ("c",)),
        ],
    )
    def test_rules(self, token, current, expected):
        assert resolve(token, current) == expected

    def test_relative_token_is_a_single_segment(self):
        """Test a relative token with a slash is not split."""
        assert resolve("x/y", ("a",)) == ("a", "x/y")

    def test_never_consults_a_tree(self):
        """Test resolving names that exist nowhere still succeeds."""
        assert resolve("nowhere", ("no", "such")) == ("no", "such", "nowhere")


class TestDisplay:
    """Test display-form conversions."""

    def test_root_renders_as_slash(self):
        assert to_display(ROOT) == "/"

    def test_nested(self):
        assert to_display(("home", "user")) == "/home/user"

    def test_from_display(self):
        assert from_display("/home/user") == ("home", "user")
        assert from_display("/") == ROOT

    def test_parent_and_join(self):
        assert parent(("a", "b")) == ("a",)
        assert parent(ROOT) == ROOT
        assert join(("a",), "b") == ("a", "b")
