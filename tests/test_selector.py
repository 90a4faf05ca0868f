"""Tests for interactive selection."""

from unittest.mock import patch

import pytest

from nodeprune.models import ScanResult
from nodeprune.selector import parse_selection, prompt_selection


@pytest.fixture
def five():
    return [ScanResult(path=f"/p{i}/node_modules", size_bytes=100 - i) for i in range(1, 6)]


class TestParseSelection:
    def test_all(self, five):
        assert parse_selection("all", five) == five

    def test_all_is_case_insensitive(self, five):
        assert parse_selection("  ALL \n", five) == five

    @pytest.mark.parametrize("text", ["none", "cancel", "NONE"])
    def test_cancel_words(self, five, text):
        assert parse_selection(text, five) == []

    def test_indices(self, five):
        assert parse_selection("1,3", five) == [five[0], five[2]]

    def test_tolerates_spaces(self, five):
        assert parse_selection(" 2 , 5 ", five) == [five[1], five[4]]

    def test_discards_bad_tokens(self, five):
        assert parse_selection("0,2,abc,6,-1,4", five) == [five[1], five[3]]

    def test_only_out_of_range_cancels(self, five):
        assert parse_selection("99", five[:3]) == []

    def test_empty_input_cancels(self, five):
        assert parse_selection("", five) == []

    def test_repeated_index_taken_once(self, five):
        assert parse_selection("2,2,1", five) == [five[1], five[0]]


class TestPromptSelection:
    @patch("nodeprune.selector.console")
    @patch("nodeprune.selector.Prompt.ask", return_value="2")
    def test_returns_choice(self, mock_ask, mock_console, five):
        assert prompt_selection(five) == [five[1]]
        mock_ask.assert_called_once()

    @patch("nodeprune.selector.console")
    @patch("nodeprune.selector.Prompt.ask", return_value="none")
    def test_cancel(self, mock_ask, mock_console, five):
        assert prompt_selection(five) == []

    @patch("nodeprune.selector.console")
    @patch("nodeprune.selector.Prompt.ask", side_effect=EOFError)
    def test_eof_cancels(self, mock_ask, mock_console, five):
        assert prompt_selection(five) == []

    @patch("nodeprune.selector.Prompt.ask")
    def test_empty_results_does_not_prompt(self, mock_ask):
        assert prompt_selection([]) == []
        mock_ask.assert_not_called()
