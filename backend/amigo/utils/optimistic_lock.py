from flask import request, abort
from datetime import timezone
from dateutil.parser import parse


def normalize_ts(ts):
    """Treat naive timestamps (SQLite drops tzinfo) as UTC."""
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts


def _client_timestamp():
    header = request.headers.get("If-Unmodified-Since")
    if not header:
        return None

    try:
        return normalize_ts(parse(header))
    except (ValueError, OverflowError):
        abort(400, description="Invalid If-Unmodified-Since header")


def enforce_optimistic_lock(entity):
    """
    Abort with 409 when ``entity`` changed after the client's
    If-Unmodified-Since time. Writes without the header are not checked.
    """
    client_ts = _client_timestamp()
    if client_ts is None:
        return

    # HTTP dates carry whole seconds only
    server_ts = normalize_ts(entity.updated_at).replace(microsecond=0)
    if server_ts > client_ts:
        abort(409, description="Draft was modified by another session")


def with_last_modified(response, entity):
    response.last_modified = normalize_ts(entity.updated_at)
    return response
