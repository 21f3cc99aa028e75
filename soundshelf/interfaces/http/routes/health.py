from __future__ import annotations

import json
import os

from flask import Blueprint, current_app, jsonify

health_bp = Blueprint("health_bp", __name__)


def _library():
    return current_app.extensions["library_service"]


@health_bp.route("/healthz")
def healthz():
    status = 200
    checks = {}
    library = _library()

    data_file = library.store.data_file
    if os.path.exists(data_file):
        try:
            with open(data_file, "r", encoding="utf-8") as handle:
                json.load(handle)
            checks["store"] = "ok"
        except (OSError, ValueError) as exc:
            # load() would silently start from an empty library
            status = 503
            checks["store"] = f"error: {exc}"
    else:
        checks["store"] = "empty"

    if library.uploads.is_writable():
        checks["uploads"] = "ok"
    else:
        status = 503
        checks["uploads"] = "not writable"

    overall = "ok" if status == 200 else "degraded"
    return jsonify({"status": overall, "checks": checks}), status


@health_bp.route("/readyz")
def readyz():
    ready = _library().uploads.is_writable()
    payload = {"status": "ready" if ready else "blocked"}
    return jsonify(payload), 200 if ready else 503
