from __future__ import annotations

from typing import List

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field


class Card(BaseModel):
    """A single kanban card as the source reports it."""

    id: str
    title: str
    list_id: str

    model_config = ConfigDict(frozen=True)


class KanbanList(BaseModel):
    """A board column with its cards, in source order."""

    id: str
    name: str
    cards: List[Card] = Field(default_factory=list)


class BoardReference(BaseModel):
    id: str
    name: str


class Board(BaseModel):
    """A board with its ordered lists."""

    id: str
    name: str
    lists: List[KanbanList] = Field(default_factory=list)

    @property
    def reference(self) -> BoardReference:
        return BoardReference(id=self.id, name=self.name)
