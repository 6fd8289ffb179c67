from __future__ import annotations

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

from card_counter.entities.constants import ScoreStatus


class ScorePair(BaseModel):
    """Effort carried by a card title.

    ``estimated`` comes from the ``(n)`` marker and ``actual`` from the
    corrective ``[n]`` marker; with only a ``(n)`` marker both are ``n``.
    """

    estimated: float = Field(default=0.0, ge=0)
    actual: float = Field(default=0.0, ge=0)
    status: ScoreStatus = Field(default=ScoreStatus.UNSCORED)

    model_config = ConfigDict(frozen=True)

    @property
    def is_scored(self) -> bool:
        return self.status == ScoreStatus.SCORED
