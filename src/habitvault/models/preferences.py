"""Per-user display preferences stored in the database."""

from __future__ import annotations

from typing import ClassVar

from sqlmodel import Field, SQLModel

TIME_RANGES = ("week", "month", "year")


class UserPreference(SQLModel, table=True):
    """Dashboard preferences; a missing row means the defaults below."""

    __tablename__: ClassVar[str] = "user_preference"

    user_id: int = Field(foreign_key="user.id", primary_key=True)
    dark_mode: bool = Field(default=False, nullable=False)
    last_time_range: str = Field(default="week", max_length=8, nullable=False)
    show_motivational_quote: bool = Field(default=True, nullable=False)

    def to_dict(self) -> dict[str, object]:
        return {
            "darkMode": self.dark_mode,
            "lastTimeRange": self.last_time_range,
            "showMotivationalQuote": self.show_motivational_quote,
        }
