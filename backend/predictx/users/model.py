import logging

from flask_jwt_extended import get_jwt_identity

from predictx.extensions import db
from predictx.utils.exceptions import UnauthorizedError
from predictx.utils.validators import safe_object_id

logger = logging.getLogger(__name__)


class User:
    def __init__(self, user_dict):
        self.id = str(user_dict["_id"])
        self.name = user_dict.get("name")
        self.email = user_dict.get("email")
        self.role = user_dict.get("role", "user")
        self.wallet_balance = round(float(user_dict.get("wallet_balance", 0)), 2)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role,
            "wallet_balance": self.wallet_balance
        }

    @staticmethod
    def find_by_id(user_id):
        oid = safe_object_id(user_id)
        if oid is None:
            return None
        return db.users.find_one({"_id": oid}, {"password_hash": 0})

    @staticmethod
    def find_by_email(email):
        return db.users.find_one({"email": email.strip().lower()})


def get_current_user():
    """Load the user behind the current access token or raise 401."""
    user_dict = User.find_by_id(get_jwt_identity())
    if not user_dict:
        logger.debug("Token identity %s has no user record", get_jwt_identity())
        raise UnauthorizedError("User not found")
    return User(user_dict)
