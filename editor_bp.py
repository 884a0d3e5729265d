"""
Flask Blueprint for the policy editor: CKEditor 5 page, seed/load of assembled HTML, and export.
Mount at /editor (e.g. /editor for the editor page, /editor/api/export for downloads).
Seeding goes through set-content + load token so the editor receives its initial HTML exactly once.
"""
import logging
import secrets
import time

from flask import Blueprint, Response, current_app, jsonify, request, send_from_directory

from policygen.assembler import render_combined
from policygen.config import CONTENT_STORE_TTL_SEC
from policygen.editor import EditSurface
from policygen.exporter import MIMETYPES, SCOPES, Exporter
from policygen.models import ExportError, FormState

logger = logging.getLogger(__name__)

editor_bp = Blueprint("editor", __name__, url_prefix="/editor")

# In-memory store for seeded content (token -> { "html", "form_state", "created" })
# Entries expire after CONTENT_STORE_TTL_SEC
_CONTENT_STORE = {}


def _expire_old():
    now = time.time()
    for token in list(_CONTENT_STORE):
        if now - _CONTENT_STORE[token]["created"] > CONTENT_STORE_TTL_SEC:
            del _CONTENT_STORE[token]


def _json_body():
    data = request.get_json(force=True, silent=True)
    return data if isinstance(data, dict) else None


@editor_bp.route("/")
def editor_page():
    """Serve the CKEditor 5 policy editor (static/editor.html)."""
    static_dir = current_app.static_folder or "static"
    return send_from_directory(static_dir, "editor.html")


@editor_bp.route("/api/set-content", methods=["POST"])
def set_content():
    """Store HTML (or the combined document for a form state) for the editor. Returns a short-lived load_token."""
    data = _json_body()
    if data is None:
        return jsonify({"error": "Invalid JSON body"}), 400
    form_state = None
    if "form_state" in data:
        if not isinstance(data["form_state"], dict):
            return jsonify({"error": "Invalid 'form_state' field"}), 400
        try:
            state = FormState.from_dict(data["form_state"])
        except ValueError as e:
            return jsonify({"error": str(e)}), 400
        form_state = state.to_dict()
        html = render_combined(state)
    else:
        html = data.get("html")
        if not isinstance(html, str):
            return jsonify({"error": "Missing or invalid 'html' field"}), 400
    _expire_old()
    token = secrets.token_urlsafe(12)
    _CONTENT_STORE[token] = {"html": html, "form_state": form_state, "created": time.time()}
    logger.debug("Stored %d chars of editor content", len(html))
    return jsonify({"load_token": token})


@editor_bp.route("/api/load")
def load_content():
    """Return stored HTML for the given token (e.g. from ?load=TOKEN)."""
    token = (request.args.get("token") or request.args.get("load") or "").strip()
    if not token:
        return jsonify({"error": "Missing token"}), 400
    _expire_old()
    entry = _CONTENT_STORE.get(token)
    if not entry:
        return jsonify({"error": "Token not found or expired"}), 404
    return jsonify({"html": entry["html"], "form_state": entry["form_state"]})


@editor_bp.route("/api/export", methods=["POST"])
def export():
    """
    Accept JSON { "html": "...", "format": "txt|html|md|pdf|docx", "scope": "combined|separate",
    "form_state": {...} } and return the file. Separate scope needs form_state.
    """
    data = _json_body()
    if data is None:
        return jsonify({"error": "Invalid JSON body"}), 400
    html = data.get("html")
    if not isinstance(html, str):
        return jsonify({"error": "Missing or invalid 'html' field"}), 400
    fmt = (data.get("format") or "html").strip().lower()
    scope = (data.get("scope") or "combined").strip().lower()
    if fmt not in MIMETYPES:
        return jsonify({"error": f"Unsupported format: {fmt}"}), 400
    if scope not in SCOPES:
        return jsonify({"error": f"Unsupported scope: {scope}"}), 400
    form_state = data.get("form_state")
    if scope == "separate" and not isinstance(form_state, dict):
        return jsonify({"error": "Separate export needs 'form_state'"}), 400
    try:
        state = FormState.from_dict(form_state)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    try:
        export_file = Exporter().export(EditSurface.from_html(html), state, fmt=fmt, scope=scope)
    except ExportError as e:
        return jsonify({"error": str(e)}), 422
    return Response(
        export_file.data,
        mimetype=export_file.mimetype,
        headers={"Content-Disposition": f"attachment; filename={export_file.filename}"},
    )
