from bson import ObjectId
from flask import Blueprint, jsonify
from flask_jwt_extended import jwt_required

from predictx.extensions import db as mongo
from predictx.users.model import get_current_user

users_bp = Blueprint("users", __name__)


@users_bp.route("/profile", methods=["GET"])
@jwt_required()
def profile():
    return jsonify(get_current_user().to_dict())


@users_bp.route("/summary", methods=["GET"])
@jwt_required()
def summary():
    """Dashboard numbers for the current user."""
    user = get_current_user()
    user_oid = ObjectId(user.id)

    bets_placed = mongo.bets.count_documents({"user_id": user_oid})
    active_count = mongo.bets.count_documents({"user_id": user_oid, "status": "active"})

    totals_pipeline = [
        {"$match": {"user_id": user_oid}},
        {"$group": {
            "_id": None,
            "total_invested": {"$sum": "$cost"},
            "total_payout": {"$sum": "$payout"}
        }}
    ]
    totals = list(mongo.bets.aggregate(totals_pipeline))
    total_invested = totals[0]["total_invested"] if totals else 0
    total_payout = totals[0]["total_payout"] if totals else 0

    settled_pipeline = [
        {"$match": {"user_id": user_oid, "status": {"$in": ["won", "lost"]}}},
        {"$group": {"_id": None, "cost": {"$sum": "$cost"}, "payout": {"$sum": "$payout"}}}
    ]
    settled = list(mongo.bets.aggregate(settled_pipeline))
    net_profit = (settled[0]["payout"] - settled[0]["cost"]) if settled else 0

    return jsonify({
        "wallet_balance": user.wallet_balance,
        "bets_placed": bets_placed,
        "active_bets": active_count,
        "resolved_bets": bets_placed - active_count,
        "total_invested": round(total_invested, 2),
        "total_payout": round(total_payout, 2),
        "net_profit": round(net_profit, 2)
    })
