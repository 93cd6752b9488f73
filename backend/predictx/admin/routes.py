"""Admin panel: login, market creation, closing and resolution."""
import hmac
import logging

from flask import Blueprint, jsonify, current_app
from flask_jwt_extended import create_access_token

from predictx.admin.forms import AdminLoginForm, EventForm, ResolveEventForm
from predictx.core import MarketService
from predictx.events.models import serialize_event
from predictx.utils.enums import UserRole
from predictx.utils.exceptions import ConflictError, NotFoundError
from predictx.utils.permissions import admin_required
from predictx.utils.validators import first_form_error, load_form, safe_object_id

logger = logging.getLogger(__name__)

admin_bp = Blueprint("admin", __name__)


def raise_for_event_error(error):
    if error == "Event not found":
        raise NotFoundError(error)
    raise ConflictError(error)


@admin_bp.route("/login", methods=["POST"])
def admin_login():
    form = load_form(AdminLoginForm)
    if not form.validate():
        return jsonify({"error": first_form_error(form)}), 400

    username_ok = hmac.compare_digest(form.username.data.encode(), current_app.config["ADMIN_USERNAME"].encode())
    password_ok = hmac.compare_digest(form.password.data.encode(), current_app.config["ADMIN_PASSWORD"].encode())
    if not (username_ok and password_ok):
        logger.warning("Failed admin login for %s", form.username.data)
        return jsonify({"error": "Invalid credentials"}), 401

    token = create_access_token(identity="admin", additional_claims={"role": UserRole.ADMIN.value})
    return jsonify({"message": "Admin login successful", "access_token": token})


@admin_bp.route("/events", methods=["GET"])
@admin_required
def list_events():
    events = MarketService.list_events_for_admin()
    return jsonify({"events": [serialize_event(e) for e in events]})


@admin_bp.route("/events", methods=["POST"])
@admin_required
def create_event():
    form = load_form(EventForm)
    if not form.validate():
        return jsonify({"error": first_form_error(form)}), 400

    success, error, event = MarketService.create_event(
        title=form.title.data,
        description=form.description.data,
        category=form.category.data,
        closing_date=form.closing_date.data,
        resolution_date=form.resolution_date.data,
        resolution_source=form.resolution_source.data,
        initial_yes_percent=form.initial_yes_price.data if form.initial_yes_price.data is not None else 50,
        fee_percent=form.fee.data if form.fee.data is not None else 2,
        image_url=form.image_url.data
    )
    if not success:
        return jsonify({"error": error}), 400

    return jsonify({"message": "Event created successfully", "event": serialize_event(event)}), 201


@admin_bp.route("/events/<event_id>/close", methods=["POST"])
@admin_required
def close_event(event_id):
    event_oid = safe_object_id(event_id)
    if not event_oid:
        return jsonify({"error": "Invalid event ID"}), 400

    success, error, event = MarketService.close_event(event_oid)
    if not success:
        raise_for_event_error(error)

    return jsonify({"message": "Event closed", "event": serialize_event(event)})


@admin_bp.route("/events/<event_id>/resolve", methods=["POST"])
@admin_required
def resolve_event(event_id):
    event_oid = safe_object_id(event_id)
    if not event_oid:
        return jsonify({"error": "Invalid event ID"}), 400

    form = load_form(ResolveEventForm)
    if not form.validate():
        return jsonify({"error": first_form_error(form)}), 400

    success, error, result = MarketService.resolve_event(event_oid, form.outcome.data)
    if not success:
        raise_for_event_error(error)

    return jsonify({
        "message": f"Event resolved as {form.outcome.data.upper()}",
        "event": serialize_event(result["event"]),
        "settlement": result["settlement"]
    })
