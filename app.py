#!/usr/bin/env python3
"""Flask JSON API for the evaluation grid - binds table and chart UI events to grid operations."""

from io import BytesIO

from flask import Flask, jsonify, request, send_file

from src.grid import DuplicateName, GridError, InvalidName, MalformedBlob, NotFound
from evaluation_app import config
from evaluation_app.audit import audit_log, setup_app_logging
from evaluation_app.report_pdf import generate_grid_pdf
from evaluation_app.session import EvaluationSession
from evaluation_app.store import BlobStore

STATUS_BY_ERROR = {
    InvalidName: 400,
    NotFound: 404,
    DuplicateName: 409,
    MalformedBlob: 422,
}


def _grid_error(e: GridError):
    status = next((code for cls, code in STATUS_BY_ERROR.items() if isinstance(e, cls)), 400)
    return jsonify({"error": str(e), "code": e.kind, "name": e.name}), status


def _json_object() -> dict | None:
    """Request JSON body as a dict; {} when absent, None when it is not an object."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    return data if isinstance(data, dict) else None


def _bad_body():
    return jsonify({"error": "Request body must be a JSON object", "code": "INVALID_BODY", "name": None}), 400


def create_app(session: EvaluationSession | None = None) -> Flask:
    log = setup_app_logging()

    if session is None:
        session = EvaluationSession(
            BlobStore(config.DATA_DIR),
            storage_key=config.STORAGE_KEY,
            clamp=config.score_clamp(),
            autoload=False,
        )
        try:
            session.load(missing_ok=True)
        except MalformedBlob as e:
            log.warning("Saved evaluation is unreadable, starting with defaults: %s", e)

    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = 1 * 1024 * 1024  # 1MB
    app.extensions["evaluation_session"] = session

    @app.route("/api/grid", methods=["GET"])
    def api_grid():
        """Table view: names, scores, row totals, column averages."""
        return jsonify(session.summary())

    # --- subjects ---

    @app.route("/api/subjects", methods=["POST"])
    def api_add_subject():
        data = _json_object()
        if data is None:
            return _bad_body()
        try:
            session.add_subject(data.get("name", ""))
        except GridError as e:
            return _grid_error(e)
        return jsonify(session.summary()), 201

    @app.route("/api/subjects/<path:name>", methods=["PATCH"])
    def api_rename_subject(name):
        data = _json_object()
        if data is None:
            return _bad_body()
        try:
            session.rename_subject(name, data.get("name", ""))
        except GridError as e:
            return _grid_error(e)
        return jsonify(session.summary())

    @app.route("/api/subjects/<path:name>", methods=["DELETE"])
    def api_remove_subject(name):
        try:
            session.remove_subject(name)
        except GridError as e:
            return _grid_error(e)
        return jsonify(session.summary())

    # --- criteria ---

    @app.route("/api/criteria", methods=["POST"])
    def api_add_criterion():
        data = _json_object()
        if data is None:
            return _bad_body()
        try:
            session.add_criterion(data.get("name", ""))
        except GridError as e:
            return _grid_error(e)
        return jsonify(session.summary()), 201

    @app.route("/api/criteria/<path:name>", methods=["PATCH"])
    def api_rename_criterion(name):
        data = _json_object()
        if data is None:
            return _bad_body()
        try:
            session.rename_criterion(name, data.get("name", ""))
        except GridError as e:
            return _grid_error(e)
        return jsonify(session.summary())

    @app.route("/api/criteria/<path:name>", methods=["DELETE"])
    def api_remove_criterion(name):
        try:
            session.remove_criterion(name)
        except GridError as e:
            return _grid_error(e)
        return jsonify(session.summary())

    # --- scores ---

    @app.route("/api/scores", methods=["PUT"])
    def api_set_score():
        """Set one cell. Blank value means 0; the configured clamp applies."""
        data = _json_object()
        if data is None:
            return _bad_body()
        subject = data.get("subject", "")
        criterion = data.get("criterion", "")
        try:
            stored = session.set_score_input(subject, criterion, data.get("value"))
        except GridError as e:
            return _grid_error(e)
        except ValueError as e:
            return jsonify({"error": str(e), "code": "INVALID_SCORE", "name": None}), 400
        snap = session.snapshot()
        return jsonify({
            "subject": subject,
            "criterion": criterion,
            "value": stored,
            "row_total": snap.row_total(subject),
            "column_average": snap.column_average(criterion),
        })

    # --- charts ---

    @app.route("/api/charts", methods=["GET"])
    def api_charts():
        return jsonify(session.charts())

    # --- persistence ---

    @app.route("/api/save", methods=["POST"])
    def api_save():
        try:
            blob = session.save()
        except OSError as e:
            audit_log("save", "error", storage_key=session.storage_key, error=str(e))
            log.exception("Save failed")
            return jsonify({"error": str(e)}), 500
        return jsonify({"saved": True, "storage_key": session.storage_key, "bytes": len(blob)})

    @app.route("/api/load", methods=["POST"])
    def api_load():
        try:
            session.load()
        except FileNotFoundError as e:
            log.warning("Load failed: %s", e)
            return jsonify({"error": str(e), "code": "NOT_SAVED", "name": session.storage_key}), 404
        except GridError as e:
            return _grid_error(e)
        return jsonify(session.summary())

    @app.route("/api/reset", methods=["POST"])
    def api_reset():
        session.reset()
        return jsonify(session.summary())

    @app.route("/api/export", methods=["GET"])
    def api_export():
        return app.response_class(session.export_blob(), mimetype="application/json")

    @app.route("/api/import", methods=["POST"])
    def api_import():
        data = _json_object()
        if data is None:
            return _bad_body()
        if "blob" not in data:
            return jsonify({"error": "blob is required", "code": "MALFORMED_BLOB", "name": None}), 400
        try:
            session.import_blob(data["blob"])
        except GridError as e:
            return _grid_error(e)
        return jsonify(session.summary())

    @app.route("/api/report.pdf", methods=["GET"])
    def api_report_pdf():
        title = request.args.get("title", "Evaluation Report")
        try:
            pdf_bytes = generate_grid_pdf(session.snapshot(), title)
        except Exception as e:
            audit_log("report_pdf", "error", error=str(e))
            log.exception("PDF report failed")
            return jsonify({"error": str(e)}), 500
        audit_log("report_pdf", "success", extra={"pdf_bytes": len(pdf_bytes)})
        return send_file(
            BytesIO(pdf_bytes),
            mimetype="application/pdf",
            as_attachment=True,
            download_name="evaluation_report.pdf",
        )

    return app


if __name__ == "__main__":
    app = create_app()
    setup_app_logging().info("Evaluation grid API on http://127.0.0.1:%d | data: %s", config.PORT, config.DATA_DIR)
    app.run(debug=True, port=config.PORT)
