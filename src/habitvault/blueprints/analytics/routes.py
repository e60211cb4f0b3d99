"""Dashboard analytics and quote routes."""

from __future__ import annotations

from flask import jsonify, request
from flask_jwt_extended import jwt_required

from ...domain.dates import format_date, parse_iso_date
from ...extensions import current_tracker, request_today
from ...services.quotes import daily_quote
from . import bp


@bp.get("/analytics/summary")
@jwt_required()
def summary():
    """Totals across all habits: overall rate, best streak, summed current streaks."""

    return jsonify({"ok": True, "summary": current_tracker().summary().to_dict()})


@bp.get("/analytics/progress")
@jwt_required()
def progress():
    time_range = request.args.get("range", "week").lower()
    rows = current_tracker().progress(time_range)
    return jsonify(
        {
            "ok": True,
            "range": time_range,
            "habits": [
                {"id": snap.definition.id, "name": snap.definition.name, **window.to_dict()}
                for snap, window in rows
            ],
        }
    )


@bp.get("/quote")
def quote():
    raw = request.args.get("date")
    day = parse_iso_date(raw) if raw else request_today()
    return jsonify({"ok": True, "date": format_date(day), "quote": daily_quote(day)})


@bp.get("/health")
def health():
    return jsonify({"status": "ok"})
