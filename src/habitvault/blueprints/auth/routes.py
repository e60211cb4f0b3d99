"""Registration, login and current-user routes."""

from __future__ import annotations

from flask import jsonify, request
from flask_jwt_extended import create_access_token, jwt_required

from ...errors import AuthenticationError, NotFoundError
from ...extensions import current_user_id, get_session_factory
from ...models.user import User
from ...services import auth as auth_service
from . import bp
from .forms import LoginForm, RegisterForm


def _token_response(user: User, status: int):
    token = create_access_token(identity=str(user.id))
    return jsonify({"ok": True, "user": user.to_dict(), "access_token": token}), status


@bp.post("/register")
def register():
    form = RegisterForm.model_validate(request.get_json(silent=True) or {})
    user = auth_service.register_user(
        email=form.email,
        password=form.password,
        name=form.name,
        session_factory=get_session_factory(),
    )
    return _token_response(user, 201)


@bp.post("/login")
def login():
    form = LoginForm.model_validate(request.get_json(silent=True) or {})
    user = auth_service.authenticate(
        email=form.email, password=form.password, session_factory=get_session_factory()
    )
    if user is None:
        raise AuthenticationError("Invalid email or password")
    return _token_response(user, 200)


@bp.get("/me")
@jwt_required()
def me():
    user = auth_service.get_user(current_user_id(), get_session_factory())
    if user is None:
        raise NotFoundError("User not found")
    return jsonify({"ok": True, "user": user.to_dict()})
