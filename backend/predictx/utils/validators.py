"""Request validation helpers."""
from bson import ObjectId, errors
from flask import request

from predictx.utils.exceptions import BadRequestError


def safe_object_id(value):
    try:
        return ObjectId(value)
    except (errors.InvalidId, TypeError):
        return None


def first_form_error(form):
    """Return the first validation message of a WTForms form."""
    for field_name, messages in form.errors.items():
        if messages:
            label = getattr(form, field_name).label.text
            message = messages[0]
            if label.lower() in message.lower():
                return message
            return f"{label}: {message}"
    return "Invalid request"


def pagination_args(args, default_limit=20, max_limit=50):
    """Parse page/limit query params, falling back to defaults on junk input."""
    try:
        page = max(1, int(args.get("page", 1)))
    except (TypeError, ValueError):
        page = 1
    try:
        limit = min(max_limit, max(1, int(args.get("limit", args.get("per_page", default_limit)))))
    except (TypeError, ValueError):
        limit = default_limit
    return page, limit


def pagination_meta(page, limit, total):
    total_pages = (total + limit - 1) // limit
    return {
        "page": page,
        "limit": limit,
        "total": total,
        "total_pages": total_pages,
        "has_next": page < total_pages,
        "has_prev": page > 1
    }


def as_text(value):
    """Form filter: JSON bodies may carry numbers where text is expected."""
    if value is None:
        return None
    return str(value).strip()


def as_secret(value):
    """Form filter for passwords: stringify without stripping."""
    if value is None:
        return None
    return str(value)


def load_form(form_class):
    """Build a form from the request, refusing JSON bodies that are not objects."""
    if request.is_json and not isinstance(request.get_json(silent=True), dict):
        raise BadRequestError("Request body must be a JSON object")
    return form_class()
