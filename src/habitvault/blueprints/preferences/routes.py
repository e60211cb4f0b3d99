"""Per-user dashboard preference routes."""

from __future__ import annotations

from typing import Literal, Optional

from flask import jsonify, request
from flask_jwt_extended import jwt_required
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from ...domain.repositories.preferences import PreferencesRepository
from ...extensions import current_user_id, get_session_factory
from ...infra.repositories.preferences import SQLModelPreferencesRepository
from . import bp


class PreferencesForm(BaseModel):
    """Partial update; omitted fields keep their stored value."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    dark_mode: Optional[bool] = Field(
        default=None, validation_alias=AliasChoices("darkMode", "dark_mode")
    )
    last_time_range: Optional[Literal["week", "month", "year"]] = Field(
        default=None, validation_alias=AliasChoices("lastTimeRange", "last_time_range")
    )
    show_motivational_quote: Optional[bool] = Field(
        default=None,
        validation_alias=AliasChoices("showMotivationalQuote", "show_motivational_quote"),
    )


def _repo() -> PreferencesRepository:
    return SQLModelPreferencesRepository(get_session_factory())


@bp.get("/", strict_slashes=False)
@jwt_required()
def get_preferences():
    prefs = _repo().get(user_id=current_user_id())
    return jsonify({"ok": True, "preferences": prefs.to_dict()})


@bp.patch("/", strict_slashes=False)
@jwt_required()
def update_preferences():
    form = PreferencesForm.model_validate(request.get_json(silent=True) or {})
    prefs = _repo().update(user_id=current_user_id(), **form.model_dump(exclude_none=True))
    return jsonify({"ok": True, "preferences": prefs.to_dict()})
