"""Tests for the summarizer module."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import requests

from gh_contrib.summarizer import ModelsSummarizer, SummarizerError, split_entries


def _response(status_code: int = 200, payload: dict | None = None, text: str = "") -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = payload or {}
    resp.text = text
    return resp


def test_split_entries_skips_blank():
    text = "Some text to summarize---END-OF-ENTRY---\n  \n---END-OF-ENTRY---Another piece of text\n"
    assert split_entries(text) == ["Some text to summarize", "Another piece of text"]


def test_summarize_posts_payload():
    session = MagicMock(spec=requests.Session)
    session.post.return_value = _response(payload={"choices": [{"message": {"content": "Short."}}]})
    summarizer = ModelsSummarizer("tok", "test-model", session=session)

    assert summarizer.summarize("long body") == "Short."

    kwargs = session.post.call_args.kwargs
    assert kwargs["json"]["model"] == "test-model"
    assert kwargs["json"]["messages"][1]["content"].endswith("long body")
    assert kwargs["headers"]["Authorization"] == "Bearer tok"


def test_summarize_http_failure():
    session = MagicMock(spec=requests.Session)
    session.post.return_value = _response(status_code=401, text="unauthorized")
    summarizer = ModelsSummarizer("tok", "m", session=session)
    with pytest.raises(SummarizerError, match="status 401: unauthorized"):
        summarizer.summarize("x")


def test_summarize_empty_choices():
    session = MagicMock(spec=requests.Session)
    session.post.return_value = _response(payload={"choices": []})
    summarizer = ModelsSummarizer("tok", "m", session=session)
    with pytest.raises(SummarizerError, match="no summary content"):
        summarizer.summarize("x")


def test_summarize_transport_error():
    session = MagicMock(spec=requests.Session)
    session.post.side_effect = requests.ConnectionError("down")
    summarizer = ModelsSummarizer("tok", "m", session=session)
    with pytest.raises(SummarizerError, match="down"):
        summarizer.summarize("x")
