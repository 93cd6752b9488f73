from flask import Blueprint, request, jsonify

from predictx.core import MarketService
from predictx.events.models import serialize_event
from predictx.extensions import db as mongo
from predictx.settlements.services import SettlementCalculator
from predictx.utils.enums import CATEGORIES, EventStatus
from predictx.utils.validators import safe_object_id, pagination_args, pagination_meta

events_bp = Blueprint("events", __name__)


@events_bp.route("/", methods=["GET"])
def list_events():
    """
    List markets with pagination.

    Query params:
    - category: Category name, "All" for every category
    - status: open/closed/resolved
    - page: Page number (default: 1)
    - limit: Items per page (default: 10, max: 50)
    """
    page, limit = pagination_args(request.args, default_limit=10)
    category = request.args.get("category")
    status = request.args.get("status")

    if status and status not in [s.value for s in EventStatus]:
        return jsonify({"error": "Invalid status filter"}), 400

    events, total = MarketService.list_events(category=category, status=status, page=page, limit=limit)

    return jsonify({
        "events": [serialize_event(e) for e in events],
        "pagination": pagination_meta(page, limit, total)
    })


@events_bp.route("/categories", methods=["GET"])
def list_categories():
    return jsonify({"categories": ["All"] + CATEGORIES})


@events_bp.route("/<event_id>", methods=["GET"])
def get_event(event_id):
    event_oid = safe_object_id(event_id)
    if not event_oid:
        return jsonify({"error": "Invalid event ID"}), 400

    event = mongo.events.find_one({"_id": event_oid})
    if not event:
        return jsonify({"error": "Event not found"}), 404

    return jsonify({"event": serialize_event(event)})


@events_bp.route("/<event_id>/quote", methods=["GET"])
def quote(event_id):
    """
    Price a prospective bet without placing it.

    Query params:
    - type: yes/no
    - quantity: number of contracts (default: 1)
    """
    event_oid = safe_object_id(event_id)
    if not event_oid:
        return jsonify({"error": "Invalid event ID"}), 400

    bet_type = request.args.get("type", "").lower()
    if bet_type not in ("yes", "no"):
        return jsonify({"error": "Type must be yes or no"}), 400

    try:
        quantity = int(request.args.get("quantity", 1))
    except ValueError:
        return jsonify({"error": "Quantity must be a whole number"}), 400
    if quantity < 1:
        return jsonify({"error": "Quantity must be at least 1"}), 400

    event = mongo.events.find_one({"_id": event_oid})
    if not event:
        return jsonify({"error": "Event not found"}), 404

    return jsonify({"quote": SettlementCalculator.quote(event, bet_type, quantity)})
