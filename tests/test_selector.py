import io
from unittest.mock import MagicMock

import pytest
from rich.console import Console

from ecsexec.exceptions import NotFoundError
from ecsexec.selector import TerminalMenu, pick_one


class TestTerminalMenu:
    def make_menu(self, answers):
        out = io.StringIO()
        console = Console(file=out, force_terminal=False, width=200)
        return TerminalMenu(console=console, stream=io.StringIO(answers)), out

    def test_select_number(self):
        menu, out = self.make_menu("2\n")
        assert menu.select("Pick your cluster", ["alpha", "beta", "gamma"]) == 1
        assert "Pick your cluster" in out.getvalue()
        assert "> 1) alpha" in out.getvalue()
        assert "  2) beta" in out.getvalue()

    def test_labels_with_brackets_are_not_markup(self):
        menu, out = self.make_menu("1\n")
        menu.select("Pick your task", ["api (arn:task) [web, db]"])
        assert "api (arn:task) [web, db]" in out.getvalue()

    def test_enter_accepts_default(self):
        menu, _ = self.make_menu("\n")
        assert menu.select("Pick", ["a", "b"], default=1) == 1

    def test_reprompts_on_invalid_input(self):
        menu, out = self.make_menu("x\n9\n0\n1\n")
        assert menu.select("Pick", ["a", "b"]) == 0
        assert out.getvalue().count("Please select one of the available options") == 3

    def test_empty_items(self):
        menu, _ = self.make_menu("1\n")
        with pytest.raises(ValueError):
            menu.select("Pick", [])


class TestPickOne:
    def test_explicit_skips_listing_and_prompt(self):
        chooser = MagicMock()
        candidates = MagicMock()

        result = pick_one("given", candidates, str, "Pick", chooser, "things")

        assert result == "given"
        candidates.assert_not_called()
        chooser.select.assert_not_called()

    def test_prompts_with_labels(self):
        chooser = MagicMock()
        chooser.select.return_value = 1

        result = pick_one(
            None, lambda: [("a", 1), ("b", 2)], lambda c: c[0], "Pick", chooser, "things"
        )

        assert result == ("b", 2)
        chooser.select.assert_called_once_with("Pick", ["a", "b"], default=0)

    def test_empty_candidates(self):
        with pytest.raises(NotFoundError, match="No things found"):
            pick_one(None, lambda: [], str, "Pick", MagicMock(), "things")

    def test_auto_single(self):
        chooser = MagicMock()
        assert pick_one(None, lambda: ["only"], str, "Pick", chooser, "things", auto_single=True) == "only"
        chooser.select.assert_not_called()

    def test_single_without_auto_still_prompts(self):
        chooser = MagicMock()
        chooser.select.return_value = 0
        assert pick_one(None, lambda: ["only"], str, "Pick", chooser, "things") == "only"
        chooser.select.assert_called_once()
