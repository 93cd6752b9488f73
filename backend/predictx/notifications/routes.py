"""Notification routes for fetching and managing user notifications."""
from datetime import datetime

from bson import ObjectId
from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from predictx.extensions import db as mongo
from predictx.users.model import get_current_user
from predictx.utils.validators import safe_object_id, pagination_args

bp = Blueprint("notifications", __name__)


@bp.route("/", methods=["GET"])
@jwt_required()
def get_notifications():
    """
    Get user's notifications with pagination.

    Query params:
    - page: Page number (default: 1)
    - per_page: Items per page (default: 20)
    - unread_only: If true, only unread notifications (default: false)
    """
    user_oid = ObjectId(get_current_user().id)

    page, per_page = pagination_args(request.args)
    unread_only = request.args.get("unread_only", "false").lower() == "true"

    query = {"user_id": user_oid}
    if unread_only:
        query["read"] = False

    notifications = list(
        mongo.notifications.find(query)
        .sort([("created_at", -1), ("_id", -1)])
        .skip((page - 1) * per_page)
        .limit(per_page)
    )

    total = mongo.notifications.count_documents(query)
    unread_count = mongo.notifications.count_documents({"user_id": user_oid, "read": False})

    for notif in notifications:
        notif["_id"] = str(notif["_id"])
        notif["user_id"] = str(notif["user_id"])
        if notif.get("created_at"):
            notif["created_at"] = notif["created_at"].isoformat()
        if notif.get("read_at"):
            notif["read_at"] = notif["read_at"].isoformat()

    return jsonify({
        "notifications": notifications,
        "page": page,
        "per_page": per_page,
        "total": total,
        "pages": (total + per_page - 1) // per_page,
        "unread_count": unread_count
    })


@bp.route("/unread-count", methods=["GET"])
@jwt_required()
def get_unread_count():
    """Get count of unread notifications."""
    count = mongo.notifications.count_documents({
        "user_id": ObjectId(get_current_user().id),
        "read": False
    })

    return jsonify({"unread_count": count})


@bp.route("/<notification_id>/read", methods=["POST"])
@jwt_required()
def mark_as_read(notification_id):
    """Mark a notification as read."""
    user_oid = ObjectId(get_current_user().id)

    notif_oid = safe_object_id(notification_id)
    if not notif_oid:
        return jsonify({"error": "Invalid notification ID"}), 400

    result = mongo.notifications.update_one(
        {"_id": notif_oid, "user_id": user_oid},
        {"$set": {"read": True, "read_at": datetime.utcnow()}}
    )

    if result.matched_count == 0:
        return jsonify({"error": "Notification not found"}), 404

    return jsonify({"status": "ok", "message": "Marked as read"})


@bp.route("/read-all", methods=["POST"])
@jwt_required()
def mark_all_as_read():
    """Mark all notifications as read."""
    result = mongo.notifications.update_many(
        {"user_id": ObjectId(get_current_user().id), "read": False},
        {"$set": {"read": True, "read_at": datetime.utcnow()}}
    )

    return jsonify({
        "status": "ok",
        "message": f"Marked {result.modified_count} notifications as read"
    })


@bp.route("/<notification_id>", methods=["DELETE"])
@jwt_required()
def delete_notification(notification_id):
    """Delete a notification."""
    user_oid = ObjectId(get_current_user().id)

    notif_oid = safe_object_id(notification_id)
    if not notif_oid:
        return jsonify({"error": "Invalid notification ID"}), 400

    result = mongo.notifications.delete_one({"_id": notif_oid, "user_id": user_oid})

    if result.deleted_count == 0:
        return jsonify({"error": "Notification not found"}), 404

    return jsonify({"status": "ok", "message": "Notification deleted"})
