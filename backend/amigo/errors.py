from flask import jsonify
from amigo.domain.invariants.exceptions import (
    CollaboratorError,
    InvariantViolation,
    PermissionDenied,
    ValidationError,
)


def register_error_handlers(app):
    @app.errorhandler(ValidationError)
    def handle_validation_error(error):
        response = jsonify({
            "error": "ValidationError",
            "message": str(error),
            "field": error.field,
        })
        response.status_code = 400
        return response

    @app.errorhandler(InvariantViolation)
    def handle_invariant_violation(error):
        response = jsonify({
            "error": "InvariantViolation",
            "message": str(error)
        })
        response.status_code = 400
        return response

    @app.errorhandler(PermissionDenied)
    def handle_permission_denied(error):
        response = jsonify({
            "error": "PermissionDenied",
            "message": str(error) or "Not allowed"
        })
        response.status_code = 403
        return response

    @app.errorhandler(CollaboratorError)
    def handle_collaborator_error(error):
        app.logger.error("Collaborator failure: %s", error)
        response = jsonify({
            "error": "CollaboratorError",
            "message": str(error)
        })
        response.status_code = 502
        return response
