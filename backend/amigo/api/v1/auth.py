from datetime import datetime, timezone
from flask import request, jsonify, g
from flask_jwt_extended import (
    create_access_token,
    get_jwt,
    jwt_required,
    verify_jwt_in_request,
)
from sqlalchemy.exc import IntegrityError
from amigo.extensions import db
from amigo.models.user import User
from amigo.models.revoked_token import RevokedToken
from amigo.normalizers.user import normalize_user
from amigo.realtime import SIGNED_IN, SIGNED_OUT, notify_auth_change
from amigo.utils.audit import log_action
from amigo.utils.transaction import transactional
from . import v1_bp

MIN_PASSWORD_LENGTH = 6


def _session_payload(user, token, claims=None):
    expires_at = None
    if claims and "exp" in claims:
        expires_at = datetime.fromtimestamp(claims["exp"], tz=timezone.utc).isoformat()

    return {
        "access_token": token,
        "expires_at": expires_at,
        "user": normalize_user(user, private=True),
    }


@v1_bp.route("/auth/signup", methods=["POST"])
def signup():
    data = request.get_json(silent=True) or {}

    email = (data.get("email") or "").strip().lower()
    password = data.get("password") or ""

    if not email or not password:
        return jsonify({"error": "Email and password required"}), 400

    if len(password) < MIN_PASSWORD_LENGTH:
        return jsonify({
            "error": f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        }), 400

    user = User()
    user.email = email
    user.username = data.get("username") or None
    user.set_password(password)

    try:
        with transactional():
            db.session.add(user)
            db.session.flush()

            log_action(
                action="user.signup",
                entity_type="user",
                entity_id=user.id,
            )
    except IntegrityError:
        return jsonify({"error": "Email or username already registered"}), 409

    token = create_access_token(identity=user.id)
    notify_auth_change(user.id, SIGNED_IN)

    return jsonify(_session_payload(user, token)), 201


@v1_bp.route("/auth/login", methods=["POST"])
def login():
    data = request.get_json(silent=True)
    if not data:
        return jsonify({"error": "Invalid request body"}), 400

    email = (data.get("email") or "").strip().lower()
    password = data.get("password")

    if not email or not password:
        return jsonify({"error": "Email and password required"}), 400

    user = User.query.filter_by(email=email).first()

    if not user or not user.check_password(password):
        return jsonify({"error": "Invalid credentials"}), 401

    if not user.is_active:
        return jsonify({"error": "User account disabled"}), 403

    token = create_access_token(identity=user.id)
    notify_auth_change(user.id, SIGNED_IN)

    return jsonify(_session_payload(user, token)), 200


@v1_bp.route("/auth/session", methods=["GET"])
def get_session():
    if not verify_jwt_in_request(optional=True):
        return jsonify({"session": None}), 200

    claims = get_jwt()
    user = db.session.get(User, claims["sub"])
    if not user or not user.is_active:
        return jsonify({"session": None}), 200

    token = request.headers.get("Authorization", "").removeprefix("Bearer ").strip()
    return jsonify({"session": _session_payload(user, token, claims)}), 200


@v1_bp.route("/auth/logout", methods=["POST"])
@jwt_required()
def logout():
    claims = get_jwt()

    revoked = RevokedToken()
    revoked.jti = claims["jti"]

    with transactional():
        db.session.add(revoked)

    notify_auth_change(claims["sub"], SIGNED_OUT)
    return jsonify({"message": "Signed out"}), 200
