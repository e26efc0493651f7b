from flask import jsonify
from amigo.realtime import versions
from . import v1_bp


@v1_bp.route("/changes", methods=["GET"])
def get_change_versions():
    """Per-table change counters; a bump means "re-fetch that collection"."""
    return jsonify({"versions": versions.snapshot()}), 200
