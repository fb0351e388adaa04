"""
core/board_settings.py
----------------------
Runtime board configuration (sprint cadence and theme).

BoardSettings is an immutable value. It is built from the environment at
startup, handed to every operation that needs it, and only ever replaced
wholesale by SettingsStore.update(). Nothing is persisted: a restart goes
back to the environment values.
"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, PositiveInt, field_validator

from pippin.core.config import Settings, Theme
from pippin.core.logging import get_logger

logger = get_logger(__name__)


class BoardSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    sprint_length_days: PositiveInt = 7
    sprint_epoch: date = date(2025, 1, 1)
    theme: Theme = Theme.warm


class SettingsUpdate(BaseModel):
    """Partial update; empty, zero and negative values leave a field unchanged."""

    sprint_length_days: Optional[int] = None
    sprint_epoch: Optional[str] = None
    theme: Optional[Theme] = None

    @field_validator("theme", mode="before")
    @classmethod
    def blank_theme_unchanged(cls, v):
        return None if v == "" else v


class SettingsStore:
    """Holds the current BoardSettings for the process."""

    def __init__(self, initial: BoardSettings) -> None:
        self._current = initial

    @classmethod
    def from_config(cls, config: Settings) -> "SettingsStore":
        return cls(
            BoardSettings(
                sprint_length_days=config.SPRINT_LENGTH_DAYS,
                sprint_epoch=config.SPRINT_EPOCH,
                theme=config.COZY_THEME,
            )
        )

    def get(self) -> BoardSettings:
        return self._current

    def update(self, patch: SettingsUpdate) -> BoardSettings:
        changes = {}
        if patch.sprint_length_days is not None and patch.sprint_length_days > 0:
            changes["sprint_length_days"] = patch.sprint_length_days
        if patch.sprint_epoch:
            try:
                changes["sprint_epoch"] = datetime.strptime(
                    patch.sprint_epoch, "%Y-%m-%d"
                ).date()
            except ValueError:
                logger.warning("Ignoring unparsable sprint epoch", value=patch.sprint_epoch)
        if patch.theme is not None:
            changes["theme"] = patch.theme

        if changes:
            self._current = self._current.model_copy(update=changes)
            logger.info("Board settings updated", fields=sorted(changes))
        return self._current
