"""Wallet routes for the virtual wallet."""
import logging

from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from predictx.core import WalletService, NotificationService
from predictx.users.model import get_current_user
from predictx.utils.enums import TransactionType
from predictx.utils.validators import first_form_error, load_form, pagination_args
from predictx.wallets.forms import DepositForm, WithdrawForm

logger = logging.getLogger(__name__)

bp = Blueprint("wallets", __name__)


@bp.route("/balance", methods=["GET"])
@jwt_required()
def get_balance():
    """Get current user's wallet balance."""
    user = get_current_user()

    return jsonify({
        "user_id": user.id,
        "balance": WalletService.get_wallet_balance(user.id)
    })


@bp.route("/summary", methods=["GET"])
@jwt_required()
def get_summary():
    """Balance plus total invested and number of active bets."""
    user = get_current_user()
    return jsonify(WalletService.get_wallet_summary(user.id))


@bp.route("/deposit", methods=["POST"])
@jwt_required()
def deposit():
    """
    Add funds to the wallet.

    Request body:
    {
        "amount": 500.00,
        "payment_method": "card"  // or "upi", defaults to card
    }
    """
    user = get_current_user()

    form = load_form(DepositForm)
    if not form.validate():
        return jsonify({"error": first_form_error(form)}), 400

    amount = round(form.amount.data, 2)
    success, error, new_balance = WalletService.credit_wallet(
        user_id=user.id,
        amount=amount,
        transaction_type=TransactionType.DEPOSIT,
        notes=f"Wallet top-up via {form.payment_method.data.upper()}"
    )
    if not success:
        return jsonify({"error": error}), 400

    NotificationService.notify_deposit(user.id, amount, form.payment_method.data)

    return jsonify({
        "status": "ok",
        "message": f"Successfully added ₹{amount:,.2f} to your wallet",
        "amount": amount,
        "payment_method": form.payment_method.data,
        "new_balance": new_balance
    }), 201


@bp.route("/withdraw", methods=["POST"])
@jwt_required()
def withdraw():
    """
    Withdraw funds to a bank account.

    Request body:
    {
        "amount": 1000.00,
        "account_number": "123456789012",
        "ifsc_code": "HDFC0001234"
    }
    """
    user = get_current_user()

    form = load_form(WithdrawForm)
    if not form.validate():
        return jsonify({"error": first_form_error(form)}), 400

    amount = round(form.amount.data, 2)
    account_tail = form.account_number.data[-4:]
    success, error, new_balance = WalletService.debit_wallet(
        user_id=user.id,
        amount=amount,
        transaction_type=TransactionType.WITHDRAW,
        notes=f"Withdrawal to account ending {account_tail} ({form.ifsc_code.data})"
    )
    if not success:
        return jsonify({"error": error}), 400

    NotificationService.notify_withdrawal(user.id, amount)

    return jsonify({
        "status": "ok",
        "message": f"Successfully initiated withdrawal of ₹{amount:,.2f}",
        "amount": amount,
        "new_balance": new_balance
    })


@bp.route("/transactions", methods=["GET"])
@jwt_required()
def get_transactions():
    """Get wallet transaction history."""
    user = get_current_user()

    page, per_page = pagination_args(request.args)
    transactions, total = WalletService.get_wallet_transactions(user.id, page=page, per_page=per_page)

    return jsonify({
        "transactions": transactions,
        "page": page,
        "per_page": per_page,
        "total": total,
        "pages": (total + per_page - 1) // per_page
    })
