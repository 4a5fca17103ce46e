"""Pydantic model for replies from the remote text-generation endpoint.

The endpoint returns a JSON object carrying the generated text in
``response``; some deployments use ``message`` instead.  ChatReply.text_or
is the one place that decides which field wins.
"""

from pydantic import BaseModel, ConfigDict


class ChatReply(BaseModel):
    """Body of a successful ``POST /api/gemini`` call."""

    model_config = ConfigDict(extra="ignore")

    response: str | None = None
    message: str | None = None

    def text_or(self, fallback: str) -> str:
        """Return the generated text, preferring ``response`` over ``message``.

        Empty strings count as absent.  *fallback* is returned when neither
        field has text.
        """
        return self.response or self.message or fallback
