"""Pydantic models for the PDF worker's text response.

The worker answers a parse request with one entry per page, each holding
the page's text content items in document order::

    {"pages": [{"items": [{"str": "Hemoglobin"}, {"str": "13.5 g/dL"}]}]}

Items without text (e.g., marked-content markers) carry no ``str`` key.
"""

from pydantic import BaseModel, Field


class WorkerTextItem(BaseModel):
    """A positioned run of text on a page."""

    text: str = Field(default="", alias="str")


class WorkerPage(BaseModel):
    """Text content of one page."""

    items: list[WorkerTextItem] = Field(default_factory=list)

    @property
    def text(self) -> str:
        return " ".join(item.text for item in self.items if item.text)


class WorkerTextResponse(BaseModel):
    """Full worker response for one document."""

    pages: list[WorkerPage]
