"""Unit tests for the prompt providers."""

from unittest.mock import patch

import pytest

from mailpost.prompts import AssumeYesPromptProvider, PromptProvider, RichPromptProvider


@pytest.mark.unit
class TestPromptProviders:
    """Test the interactive and non-interactive providers."""

    def test_providers_satisfy_protocol(self):
        assert isinstance(RichPromptProvider(), PromptProvider)
        assert isinstance(AssumeYesPromptProvider(), PromptProvider)

    def test_assume_yes(self):
        prompts = AssumeYesPromptProvider()
        assert prompts.ask("Title", default="Trip") == "Trip"
        assert prompts.ask("Title") == ""
        assert prompts.confirm("Send anyway?") is True

    def test_rich_ask_strips_answer_and_shows_choices(self):
        with patch("mailpost.prompts.Prompt.ask", return_value="  Travel ") as mock_ask:
            answer = RichPromptProvider().ask("Category", default="General", choices=["General", "Travel"])

        assert answer == "Travel"
        text = mock_ask.call_args.args[0]
        assert "General, Travel" in text
        assert mock_ask.call_args.kwargs["default"] == "General"

    def test_rich_ask_without_default(self):
        with patch("mailpost.prompts.Prompt.ask", return_value="x") as mock_ask:
            RichPromptProvider().ask("Subject")
        assert "default" not in mock_ask.call_args.kwargs

    def test_rich_confirm(self):
        with patch("mailpost.prompts.Confirm.ask", return_value=False) as mock_confirm:
            assert RichPromptProvider().confirm("[status draft] again?") is False
        # markup in questions is escaped
        assert mock_confirm.call_args.args[0] == "\\[status draft] again?"
