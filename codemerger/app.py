"""
CodeMerger: a small Flask app to upload files or zip bundles, arrange them,
and copy one merged text document plus an ASCII tree of their paths.
Everything lives in memory for the lifetime of the process.
"""

from flask import Flask, Response, jsonify, render_template_string, request

from . import config
from .ingest import IngestError, UploadBlob
from .page import INDEX_HTML
from .render import download_filename
from .selection import status_of
from .store import StoreError
from .tree import NodeNotFound, TreeNode
from .workspace import BusyError, Workspace

app = Flask(__name__)
app.config["MAX_CONTENT_LENGTH"] = config.MAX_UPLOAD_BYTES

workspace = Workspace()


# -------------------------------------------------------
# Helpers
# -------------------------------------------------------
def _error(message: str, status: int = 400):
    return jsonify({"error": message}), status


def _json_body() -> dict:
    data = request.get_json(force=True, silent=True)
    return data if isinstance(data, dict) else {}


def _int_field(data: dict, key: str) -> int:
    value = data.get(key)
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"{key} must be an integer")
    return value


def _files_payload():
    return [
        {"index": i, "name": r.name, "chars": r.size}
        for i, r in enumerate(workspace.store)
    ]


def _node_payload(node: TreeNode):
    item = {
        "name": node.name,
        "path": node.path,
        "is_dir": node.is_folder,
        "status": status_of(workspace.selected, node).value,
    }
    if node.is_folder:
        item["expanded"] = node.path in workspace.expanded
        item["children"] = [_node_payload(c) for c in node.children]
    else:
        item["fileIndex"] = node.file_index
        item["sizeKb"] = round(workspace.store[node.file_index].size / 1024, 1)
    return item


def _state():
    """Everything the page needs after an edit."""
    with workspace.lock:
        payload = {
            "files": _files_payload(),
            "selected": sorted(workspace.selected),
            "stats": workspace.stats(),
            "processing": workspace.is_processing,
        }
    return jsonify(payload)


@app.errorhandler(StoreError)
@app.errorhandler(NodeNotFound)
@app.errorhandler(ValueError)
def _bad_request(e):
    return _error(str(e), 400)


@app.errorhandler(BusyError)
def _busy(e):
    return _error(str(e), 409)


@app.errorhandler(IngestError)
def _ingest_failed(e):
    app.logger.error("Upload failed: %s", e)
    return _error("Failed to process files", 500)


@app.errorhandler(413)
def _too_large(e):
    return _error(f"Upload exceeds {config.MAX_UPLOAD_BYTES} bytes", 413)


# -------------------------------------------------------
# Flask Routes
# -------------------------------------------------------
@app.route("/")
def index():
    return render_template_string(INDEX_HTML)


@app.route("/api/files")
def api_files():
    return _state()


@app.route("/api/upload", methods=["POST"])
def api_upload():
    """
    Multipart upload; every part under ``files`` is one blob. Zip parts are
    expanded, the rest decoded as text. The whole batch is appended at once.
    """
    uploads = request.files.getlist("files")
    if not uploads:
        return _error("No files uploaded")
    blobs = [
        UploadBlob(name=f.filename or "untitled", content_type=f.mimetype or "", read=f.read)
        for f in uploads
    ]
    batch = workspace.ingest(blobs)
    app.logger.info("Uploaded %d blobs -> %d files", len(blobs), len(batch))
    return _state()


@app.route("/api/paste", methods=["POST"])
def api_paste():
    """Receives JSON: { "text": "..." } and stores it as one pasted file."""
    text = _json_body().get("text")
    if not isinstance(text, str) or not text:
        return _error("text must be a non-empty string")
    workspace.paste_text(text)
    return _state()


@app.route("/api/files/move", methods=["POST"])
def api_move():
    """Receives JSON: { "index": 3, "direction": "up" | "down" }."""
    data = _json_body()
    index = _int_field(data, "index")
    direction = data.get("direction")
    if direction == "up":
        workspace.move_up(index)
    elif direction == "down":
        workspace.move_down(index)
    else:
        return _error("direction must be 'up' or 'down'")
    return _state()


@app.route("/api/files/reorder", methods=["POST"])
def api_reorder():
    """Receives JSON: { "from": 0, "to": 2 }; ``to`` counts after removal."""
    data = _json_body()
    workspace.reorder(_int_field(data, "from"), _int_field(data, "to"))
    return _state()


@app.route("/api/files/<int:index>", methods=["DELETE"])
def api_remove(index):
    workspace.remove(index)
    return _state()


@app.route("/api/files/remove", methods=["POST"])
def api_remove_many():
    """Receives JSON: { "indices": [0, 4, 2] }."""
    indices = _json_body().get("indices")
    if not isinstance(indices, list):
        return _error("indices must be a list")
    if not all(isinstance(i, int) and not isinstance(i, bool) for i in indices):
        return _error("indices must be integers")
    workspace.remove_many(indices)
    return _state()


@app.route("/api/files/clear", methods=["POST"])
def api_clear():
    workspace.clear()
    return _state()


@app.route("/api/tree")
def api_tree():
    """Whole derived hierarchy with per-node selection status."""
    with workspace.lock:
        payload = {
            "children": [_node_payload(c) for c in workspace.tree.root.children],
            "selected": sorted(workspace.selected),
        }
    return jsonify(payload)


@app.route("/api/selection/toggle", methods=["POST"])
def api_toggle_selection():
    """Receives JSON: { "path": "src/app", "is_dir": true }; a null path means the root."""
    data = _json_body()
    path = data.get("path")
    if path is not None and not isinstance(path, str):
        return _error("path must be a string or null")
    with workspace.lock:
        status = workspace.toggle_selection(path, bool(data.get("is_dir")))
        selected = sorted(workspace.selected)
    return jsonify({"status": status.value, "selected": selected})


@app.route("/api/selection/remove", methods=["POST"])
def api_remove_selected():
    removed = workspace.remove_selected()
    app.logger.info("Removed %d selected files", removed)
    return _state()


@app.route("/api/folders/toggle", methods=["POST"])
def api_toggle_folder():
    """Receives JSON: { "path": "src/app" }."""
    path = _json_body().get("path")
    if not isinstance(path, str):
        return _error("path must be a string")
    return jsonify({"path": path, "expanded": workspace.toggle_folder(path)})


@app.route("/api/template", methods=["GET", "PUT"])
def api_template():
    if request.method == "PUT":
        template = _json_body().get("template")
        if not isinstance(template, str):
            return _error("template must be a string")
        workspace.set_template(template)
    return jsonify({"template": workspace.template, "default": config.DEFAULT_TEMPLATE})


@app.route("/api/template/reset", methods=["POST"])
def api_reset_template():
    workspace.reset_template()
    return jsonify({"template": workspace.template, "default": config.DEFAULT_TEMPLATE})


@app.route("/api/document")
def api_document():
    return Response(workspace.document, mimetype="text/plain")


@app.route("/api/document/download")
def api_download():
    return Response(
        workspace.document,
        mimetype="text/plain",
        headers={"Content-Disposition": f'attachment; filename="{download_filename()}"'},
    )


@app.route("/api/structure")
def api_structure():
    return Response(workspace.structure, mimetype="text/plain")
