import logging
from datetime import datetime

from flask import Blueprint, jsonify, current_app
from flask_jwt_extended import create_access_token, jwt_required, get_jwt_identity, get_jwt
from pymongo.errors import DuplicateKeyError

from predictx import bcrypt
from predictx.auth.forms import RegistrationForm, LoginForm
from predictx.core import WalletService
from predictx.extensions import db
from predictx.users.model import User, get_current_user
from predictx.utils.enums import UserRole, TransactionType
from predictx.utils.validators import first_form_error, load_form

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__)


def issue_token(user_dict):
    return create_access_token(
        identity=str(user_dict["_id"]),
        additional_claims={"role": user_dict.get("role", UserRole.USER.value)}
    )


@auth_bp.route("/register", methods=["POST"])
def register():
    form = load_form(RegistrationForm)
    if not form.validate():
        return jsonify({"error": first_form_error(form)}), 400

    email = form.email.data.lower()
    if db.users.find_one({"email": email}):
        return jsonify({"error": "User already exists"}), 409

    user = {
        "name": form.name.data,
        "email": email,
        "password_hash": bcrypt.generate_password_hash(form.password.data).decode("utf-8"),
        "wallet_balance": 0.0,
        "role": UserRole.USER.value,
        "created_at": datetime.utcnow()
    }

    try:
        res = db.users.insert_one(user)
    except DuplicateKeyError:
        return jsonify({"error": "User already exists"}), 409
    user["_id"] = res.inserted_id

    bonus = current_app.config.get("SIGNUP_BONUS", 0)
    if bonus > 0:
        WalletService.credit_wallet(
            user_id=str(res.inserted_id),
            amount=bonus,
            transaction_type=TransactionType.BONUS,
            notes="Signup bonus"
        )
        user["wallet_balance"] = bonus

    logger.info("Registered user %s", res.inserted_id)
    return jsonify({
        "message": "Registration successful! Welcome to the platform.",
        "access_token": issue_token(user),
        "user": User(user).to_dict()
    }), 201


@auth_bp.route("/login", methods=["POST"])
def login():
    form = load_form(LoginForm)
    if not form.validate():
        return jsonify({"error": first_form_error(form)}), 400

    user = User.find_by_email(form.email.data)
    if not user or not bcrypt.check_password_hash(user["password_hash"], form.password.data):
        return jsonify({"error": "Invalid credentials"}), 401

    return jsonify({
        "message": "Login successful",
        "access_token": issue_token(user),
        "user": User(user).to_dict()
    })


@auth_bp.route("/logout", methods=["POST"])
@jwt_required()
def logout():
    """Revoke the token used for this request."""
    db.token_blocklist.insert_one({
        "jti": get_jwt()["jti"],
        "identity": get_jwt_identity(),
        "created_at": datetime.utcnow()
    })
    return jsonify({"message": "You have been logged out"})


@auth_bp.route("/me", methods=["GET"])
@jwt_required()
def me():
    return jsonify(get_current_user().to_dict())
