#!/usr/bin/env python3
"""HTTP API for autodocker."""

import logging
import os

from flask import Flask, jsonify, request

from analyzers.detector import StackDetector
from config.defaults import DEFAULTS
from config.stacks import BACKEND_ORDER, BACKEND_STACKS, DATABASE_SERVICES, FRONTEND_RULES
from core.errors import UnsupportedBackend, UnsupportedDatabase, UnsupportedStack, WriteError
from core.orchestrator import Orchestrator
from generators.synthesizer import ArtifactSynthesizer
from utils.log import setup_logging

logger = logging.getLogger(__name__)

app = Flask(__name__)
detector = StackDetector()
history = []
_MAX_HISTORY = 50


def _record(entry):
    history.append(entry)
    if len(history) > _MAX_HISTORY:
        del history[:len(history) - _MAX_HISTORY]


def _target_dir(data):
    """Return (path, error_response) for the request body."""
    if not isinstance(data, dict):
        return None, (jsonify({"error": "Invalid JSON body"}), 400)
    if not str(data.get("path", "")).strip():
        return None, (jsonify({"error": "Missing path"}), 400)
    path = str(data["path"]).strip()
    if not os.path.isdir(path):
        return None, (jsonify({"error": f"Not a directory: {path}"}), 400)
    return path, None


@app.route("/api/stacks")
def api_stacks():
    return jsonify({
        "frontends": [{"kind": kind, "port": port} for kind, _, port in FRONTEND_RULES],
        "backends": [
            {
                "kind": kind,
                "name": BACKEND_STACKS[kind]["name"],
                "port": BACKEND_STACKS[kind]["port"],
                "source": BACKEND_STACKS[kind]["source"],
            }
            for kind in BACKEND_ORDER
        ],
        "databases": [
            {"kind": kind, "image": service["image"]}
            for kind, service in DATABASE_SERVICES.items()
        ],
    })


@app.route("/api/detect", methods=["POST"])
def api_detect():
    path, error = _target_dir(request.get_json(silent=True))
    if error:
        return error

    profile, results = detector.detect_with_report(path)
    return jsonify({
        "path": path,
        "profile": profile.to_dict(),
        "sources": [r.to_dict() for r in results],
    })


@app.route("/api/generate", methods=["POST"])
def api_generate():
    """Detect, synthesize and (unless dry_run) write the artifacts."""
    data = request.get_json(silent=True)
    path, error = _target_dir(data)
    if error:
        return error

    dry_run = data.get("dry_run", False)
    with_compose = data.get("with_compose", DEFAULTS["compose_backend_only"])
    for name, value in (("dry_run", dry_run), ("with_compose", with_compose)):
        if not isinstance(value, bool):
            return jsonify({"error": f"{name} must be a boolean"}), 400
    orchestrator = Orchestrator(
        detector=detector,
        synthesizer=ArtifactSynthesizer(compose_backend_only=with_compose),
    )

    try:
        result = orchestrator.run(path, dry_run=dry_run)
    except (UnsupportedStack, UnsupportedBackend, UnsupportedDatabase) as e:
        return jsonify({"path": path, "error": str(e)}), 422
    except WriteError as e:
        logger.error("Write failed for %s: %s", path, e)
        return jsonify({"path": path, "error": str(e)}), 500

    body = {
        "path": path,
        "profile": result.profile.to_dict(),
        "mode": result.mode,
        "files": result.files,
        "written": result.written,
        "dry_run": dry_run,
    }
    _record({"path": path, "mode": result.mode, "written": result.written, "dry_run": dry_run})
    return jsonify(body)


@app.route("/api/history")
def api_history():
    return jsonify(history)


if __name__ == "__main__":
    setup_logging(DEFAULTS["log_level"])
    port = int(os.environ.get("PORT", 5001))
    print(f"autodocker API running at http://localhost:{port}")
    app.run(debug=False, port=port)
