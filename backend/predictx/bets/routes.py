from flask import Blueprint, jsonify
from flask_jwt_extended import jwt_required

from predictx.bets.forms import BetForm
from predictx.core import BetService
from predictx.core.bet_service import serialize_bet
from predictx.users.model import get_current_user
from predictx.utils.exceptions import BadRequestError, NotFoundError
from predictx.utils.validators import first_form_error, load_form, safe_object_id

bets_bp = Blueprint("bets", __name__)


@bets_bp.route("/", methods=["POST"])
@jwt_required()
def place_bet():
    """
    Buy YES or NO contracts on a market.

    Request body:
    {
        "event_id": "...",
        "type": "yes",
        "quantity": 3
    }
    """
    user = get_current_user()

    form = load_form(BetForm)
    if not form.validate():
        return jsonify({"error": first_form_error(form)}), 400

    event_oid = safe_object_id(form.event_id.data)
    if not event_oid:
        return jsonify({"error": "Invalid event ID"}), 400

    quantity = form.quantity.data if form.quantity.data is not None else 1
    success, error, bet = BetService.place_bet(
        user_id=user.id,
        event_id=event_oid,
        bet_type=form.type.data,
        quantity=quantity
    )
    if not success:
        if error == "Event not found":
            raise NotFoundError(error)
        raise BadRequestError(error)

    return jsonify({
        "message": f"Successfully placed a {bet['type'].upper()} bet of {bet['quantity']} contracts",
        "bet": serialize_bet(bet),
        "new_balance": bet["balance_after"]
    }), 201


@bets_bp.route("/", methods=["GET"])
@jwt_required()
def list_bets():
    """The current user's bets, split into active and resolved."""
    user = get_current_user()
    return jsonify(BetService.get_user_bets(user.id))
