"""Habit routes."""

from __future__ import annotations

from flask import jsonify, request
from flask_jwt_extended import jwt_required

from ...domain.dates import parse_iso_date
from ...domain.schedule import RecurrenceRule
from ...extensions import current_tracker
from ...errors import HabitVaultError
from . import bp
from .forms import HabitForm, StatusForm


@bp.get("/", strict_slashes=False)
@jwt_required()
def list_habits():
    """Return every habit with its log and current metrics."""

    tracker = current_tracker()
    return jsonify({"ok": True, "habits": [snap.to_dict() for snap in tracker.list_habits()]})


@bp.post("/", strict_slashes=False)
@jwt_required()
def create_habit():
    form = HabitForm.model_validate(request.get_json(silent=True) or {})
    missing = form.missing_for_create()
    if missing:
        raise HabitVaultError(f"Missing required fields: {', '.join(missing)}")
    rule = form.to_rule() or RecurrenceRule.daily()

    snapshot = current_tracker().add_habit(form.name, rule, form.start_date)
    return jsonify({"ok": True, "habit": snapshot.to_dict()}), 201


@bp.get("/<int:habit_id>")
@jwt_required()
def get_habit(habit_id: int):
    snapshot = current_tracker().get_habit(habit_id)
    return jsonify({"ok": True, "habit": snapshot.to_dict()})


@bp.put("/<int:habit_id>")
@jwt_required()
def update_habit(habit_id: int):
    """Edit name, schedule or start date; metrics are recomputed from the stored log."""

    form = HabitForm.model_validate(request.get_json(silent=True) or {})
    snapshot = current_tracker().update_habit(
        habit_id,
        name=form.name,
        rule=form.to_rule(),
        start_date=form.start_date,
    )
    return jsonify({"ok": True, "habit": snapshot.to_dict()})


@bp.delete("/<int:habit_id>")
@jwt_required()
def delete_habit(habit_id: int):
    current_tracker().delete_habit(habit_id)
    return "", 204


@bp.put("/<int:habit_id>/logs/<day>")
@jwt_required()
def mark_status(habit_id: int, day: str):
    """Mark ``day`` completed or missed, overwriting any earlier mark."""

    form = StatusForm.model_validate(request.get_json(silent=True) or {})
    snapshot = current_tracker().mark_status(habit_id, parse_iso_date(day), form.status)
    return jsonify({"ok": True, "habit": snapshot.to_dict()})


@bp.get("/<int:habit_id>/calendar")
@jwt_required()
def month_calendar(habit_id: int):
    """Heatmap cells for one month (defaults to the current month)."""

    tracker = current_tracker()
    today = tracker.today()
    try:
        year = int(request.args.get("year", today.year))
        month = int(request.args.get("month", today.month))
    except ValueError as exc:
        raise HabitVaultError("year and month must be integers") from exc

    cells = tracker.month_calendar(habit_id, year, month)
    return jsonify(
        {
            "ok": True,
            "year": year,
            "month": month,
            "days": [cell.to_dict() for cell in cells],
        }
    )
