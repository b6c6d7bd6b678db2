from flask import Blueprint, request
from flask_login import login_required, current_user

from schemas import GoogleLogin
from services.auth import get_user, handle_google_login
from utils.errors import InvalidInput
from utils.helpers import success

# Create blueprint
auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/google", methods=["POST"])
def google_login():
    body = request.get_json(silent=True) or {}
    if not body.get("token"):
        raise InvalidInput("Token is required")

    login = GoogleLogin.model_validate(body)
    token, user = handle_google_login(login.token)
    return success({"token": token, "user": user.to_dict()})


@auth_bp.route("/user")
@login_required
def user():
    return success(get_user(current_user.id).to_dict())
