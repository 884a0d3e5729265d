"""
Web entry point: CKEditor 5 policy editor at /editor plus a live-preview API.
Run: python app.py  then open http://127.0.0.1:5000
"""
import sys
from pathlib import Path

from flask import Flask, jsonify, redirect, request, url_for

# Allow importing policygen from project root
_root = Path(__file__).resolve().parent
if str(_root) not in sys.path:
    sys.path.insert(0, str(_root))

from editor_bp import editor_bp
from policygen.assembler import render_preview
from policygen.config import MAX_CONTENT_LENGTH, configure_logging
from policygen.models import FormState
from policygen.templates import default_catalog

configure_logging()

app = Flask(__name__, static_folder="static")
app.config["MAX_CONTENT_LENGTH"] = MAX_CONTENT_LENGTH
app.register_blueprint(editor_bp)


@app.route("/")
def index():
    return redirect(url_for("editor.editor_page"))


@app.route("/api/catalog")
def catalog():
    """Policy keys with their names and clause checkboxes, in declaration order."""
    return jsonify([
        {
            "key": key,
            "name": default_catalog.get(key).name,
            "clauses": [{"id": c.id, "label": c.label} for c in default_catalog.get(key).clauses],
        }
        for key in default_catalog.keys()
    ])


@app.route("/api/preview", methods=["POST"])
def preview():
    data = request.get_json(force=True, silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Invalid JSON body"}), 400
    try:
        state = FormState.from_dict(data.get("form_state"))
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    return jsonify({"html": render_preview(str(data.get("policy") or ""), state)})


if __name__ == "__main__":
    app.run(debug=True, port=5000, use_reloader=False)
