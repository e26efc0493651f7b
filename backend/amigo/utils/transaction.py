from contextlib import contextmanager
from flask import current_app
from sqlalchemy.exc import OperationalError
from amigo.extensions import db
from amigo.domain.invariants.exceptions import CollaboratorError


@contextmanager
def transactional():
    """
    Commit on success, roll back and re-raise on failure.

    A database that cannot be reached surfaces as ``CollaboratorError``;
    constraint errors propagate unchanged for the caller to map.
    """
    try:
        yield
        db.session.commit()
    except OperationalError as exc:
        db.session.rollback()
        current_app.logger.error("Database write failed: %s", exc)
        raise CollaboratorError("Database unavailable") from exc
    except Exception:
        db.session.rollback()
        raise
