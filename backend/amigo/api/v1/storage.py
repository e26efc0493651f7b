import mimetypes
from io import BytesIO
from flask import abort, current_app, request, send_file
from amigo.services.image_intake import transform_image
from amigo.services.storage import TRANSFORM_KEYS, StorageError
from amigo.domain.invariants.exceptions import ValidationError
from . import v1_bp


@v1_bp.route("/storage/<bucket>/<path:path>", methods=["GET"])
def serve_object(bucket, path):
    storage = current_app.extensions["object_storage"]
    if bucket != storage.bucket:
        abort(404)

    try:
        data = storage.read(path)
    except (FileNotFoundError, StorageError):
        abort(404)

    mimetype = mimetypes.guess_type(path)[0] or "application/octet-stream"
    transform = {key: request.args[key] for key in TRANSFORM_KEYS if key in request.args}

    if transform:
        try:
            data, mimetype = transform_image(data, **transform)
        except (ValidationError, ValueError, OSError, KeyError) as exc:
            # Serve the original rather than a broken image
            current_app.logger.warning("Transform of %s failed: %s", path, exc)

    return send_file(BytesIO(data), mimetype=mimetype)
