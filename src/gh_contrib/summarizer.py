"""AI summarization of pull request and issue bodies."""

from __future__ import annotations

import logging
from typing import Protocol

import requests

from .renderer import ENTRY_DELIMITER

logger = logging.getLogger(__name__)

MODELS_ENDPOINT = "https://models.inference.ai.azure.com/chat/completions"
REQUEST_TIMEOUT = 120

SYSTEM_PROMPT = """You are an expert engineering manager assistant designed to
summarize the bodies of GitHub issues and pull requests. Your goal is to
extract key details, provide concise summaries, and ignore irrelevant
sections or headers such as 'Mitigation and Rollback Strategies', 'Testing',
'Deployment Plan', and 'Approval Responsibility'. Ensure the summaries are
actionable and easy to understand. Your responses should be in Markdown
format without wrapping Markdown in a code fence and geared for a technical
audience with an emphasis on readability.

Format entries as follows:
## <descriptive title>
<summary of the entry>
### Links
- [Link to Artifact 1](<URL>)
- [Link to Artifact 2](<URL>)

<br /><br />

For each distinct entry, provide a summary that captures the essence of the
content, while ensuring that any links to artifacts are included. Do not
include any headers or irrelevant sections in your summaries."""

USER_PROMPT = """Summarize the following text while ignoring sections with
headers like (e.g., 'Mitigation and Rollback Strategies', 'Testing',
'Deployment Plan', 'Approval Responsibility'), include links to all
artifacts: {text}"""


class SummarizerError(Exception):
    """Summarizing one entry failed."""


class Summarizer(Protocol):
    def summarize(self, text: str) -> str: ...


def split_entries(text: str) -> list[str]:
    """Split ``all --body-only`` style output into non-blank entries."""
    return [entry.strip() for entry in text.split(ENTRY_DELIMITER) if entry.strip()]


class ModelsSummarizer:
    """Chat-completions client for the GitHub Models inference endpoint."""

    def __init__(
        self,
        token: str,
        model: str,
        endpoint: str = MODELS_ENDPOINT,
        session: requests.Session | None = None,
    ) -> None:
        self._token = token
        self.model = model
        self._endpoint = endpoint
        self._session = session or requests.Session()

    def _payload(self, text: str) -> dict:
        return {
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": USER_PROMPT.format(text=text)},
            ],
            "temperature": 1.0,
            "top_p": 1.0,
            "max_tokens": 1000,
            "model": self.model,
        }

    def summarize(self, text: str) -> str:
        logger.debug("Summarizing %d characters with %s", len(text), self.model)
        try:
            response = self._session.post(
                self._endpoint,
                json=self._payload(text),
                headers={"Authorization": f"Bearer {self._token}"},
                timeout=REQUEST_TIMEOUT,
            )
        except requests.RequestException as exc:
            raise SummarizerError(f"error making POST request: {exc}") from exc
        if response.status_code != 200:
            raise SummarizerError(
                f"AI API request failed with status {response.status_code}: {response.text}"
            )
        try:
            choices = response.json().get("choices") or []
        except ValueError as exc:
            raise SummarizerError(f"error parsing AI response JSON: {exc}") from exc
        content = ""
        if choices:
            content = (choices[0].get("message") or {}).get("content") or ""
        if not content:
            raise SummarizerError("no summary content available in the AI response")
        return content
