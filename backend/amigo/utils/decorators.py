from functools import wraps
from flask import g, jsonify
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request
from amigo.domain.invariants.exceptions import PermissionDenied
from amigo.extensions import db
from amigo.models.user import User


def login_required(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        verify_jwt_in_request()

        user = db.session.get(User, get_jwt_identity())
        if not user:
            return jsonify({"error": "User not found"}), 401

        if not user.is_active:
            return jsonify({"error": "User account disabled"}), 403

        g.current_user = user
        return fn(*args, **kwargs)
    return wrapper


def assert_owner(entity, user, owner_field="user_id"):
    if getattr(entity, owner_field) != user.id:
        raise PermissionDenied("Not authorized to modify this resource")
