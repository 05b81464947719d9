"""Flask web API: directory listing and bundle generation.

Each route is one synchronous request/response; the server keeps no state
between requests.
"""

from __future__ import annotations

import logging

from flask import Flask, Response, jsonify, request

from .bundle import LocalContentProvider
from .errors import ProviderError
from .file_tree_model import nodes_to_json

logger = logging.getLogger(__name__)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 5000


def create_app(provider: LocalContentProvider | None = None) -> Flask:
    """Build the Flask app around a local filesystem provider."""
    app = Flask(__name__)
    content_provider = provider if provider is not None else LocalContentProvider()

    @app.get("/api/list-directory")
    def list_directory():
        dir_path = (request.args.get("dirPath") or "").strip()
        if not dir_path:
            return jsonify({"error": "dirPath missing"}), 400
        try:
            tree = content_provider.list_directory(dir_path)
        except ProviderError as exc:
            logger.warning("list-directory failed for %s: %s", dir_path, exc)
            return jsonify({"error": "Unable to read directory"}), 500
        return jsonify(nodes_to_json(tree.children))

    @app.post("/api/get-files")
    def get_files():
        body = request.get_json(silent=True)
        if not isinstance(body, dict):
            return Response("Invalid request body", status=400, mimetype="text/plain")
        dir_path = body.get("dirPath")
        selections = body.get("selections")
        if not isinstance(dir_path, str) or not dir_path or not isinstance(selections, list):
            return Response("Invalid request body", status=400, mimetype="text/plain")

        rel_paths = [item for item in selections if isinstance(item, str)]
        include_file_map = body.get("includeFileMap", True) is not False
        logger.info("get-files for %s with %d selections", dir_path, len(rel_paths))
        try:
            bundle = content_provider.read_files(dir_path, rel_paths, include_file_map=include_file_map)
        except Exception:
            logger.exception("get-files error")
            return Response("Internal server error", status=500, mimetype="text/plain")
        return Response(bundle, mimetype="application/xml")

    return app


def serve(host: str = DEFAULT_HOST, port: int = DEFAULT_PORT, provider: LocalContentProvider | None = None) -> None:
    app = create_app(provider)
    logger.info("Serving context-builder API on http://%s:%d", host, port)
    app.run(host=host, port=port)
