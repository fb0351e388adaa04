"""
schemas/settings.py
-------------------
Response model for the board settings endpoint.
"""

from datetime import date

from pydantic import BaseModel

from pippin.core.board_settings import BoardSettings
from pippin.core.config import Theme


class SettingsRead(BaseModel):
    sprint_length_days: int
    sprint_epoch: date
    theme: Theme
    account_id: str

    @classmethod
    def build(cls, board: BoardSettings, account_id: str) -> "SettingsRead":
        return cls(account_id=account_id, **board.model_dump())
