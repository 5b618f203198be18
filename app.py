import io
import logging
from datetime import date

from flask import Flask, Response, jsonify, request

import config
from services import input_parser, report, size_policy
from services.request_processor import process_inventory_requests, summarize_results

logger = logging.getLogger(__name__)

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


class UploadValidationError(Exception):
    pass


def _truthy(value):
    if value is None:
        return False
    return str(value).strip().lower() in {"1", "true", "yes", "on", "y"}


app = Flask(__name__)
app.config.update(MAX_CONTENT_LENGTH=config.MAX_UPLOAD_BYTES or None)


def _read_upload(field_name):
    file = request.files.get(field_name)
    if not file or not getattr(file, "filename", ""):
        raise UploadValidationError(f"Please choose a {field_name} file to upload.")
    raw = file.read()
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise UploadValidationError(f"The {field_name} file must be UTF-8 text.")


def _process_upload():
    items_text = _read_upload("items")
    inventories_text = _read_upload("inventories")
    policy_name = (request.form.get("size_policy") or config.SIZE_POLICY).strip().lower()
    log_unresolved = (
        _truthy(request.form.get("log_unresolved"))
        if "log_unresolved" in request.form
        else config.LOG_UNRESOLVED
    )

    try:
        catalog = input_parser.read_from_text(items_text, input_parser.read_items)
        lines = input_parser.read_from_text(inventories_text, input_parser.read_inventory_lines)
        policy = size_policy.resolve_size_policy(policy_name, config.WEIGHTS_PATH)
    except ValueError as exc:
        raise UploadValidationError(str(exc))

    results = process_inventory_requests(
        lines,
        catalog,
        size_policy=policy,
        log_unresolved=log_unresolved,
    )
    return catalog, results


@app.route("/health")
def health():
    return jsonify({"status": "ok"})


@app.route("/api/inventories/process", methods=["POST"])
def api_process_inventories():
    try:
        catalog, results = _process_upload()
    except UploadValidationError as exc:
        return jsonify({"error": str(exc)}), 400
    except OSError as exc:
        logger.exception("Failed to load size policy data")
        return jsonify({"error": f"Processing failed: {exc}"}), 400

    return jsonify(
        {
            "inventory_count": len(results),
            "item_count": len(catalog),
            "inventories": summarize_results(results),
            "report": report.render_report(results, catalog),
        }
    )


@app.route("/api/inventories/export.xlsx", methods=["POST"])
def api_export_inventories():
    try:
        catalog, results = _process_upload()
    except UploadValidationError as exc:
        return jsonify({"error": str(exc)}), 400
    except OSError as exc:
        logger.exception("Failed to load size policy data")
        return jsonify({"error": f"Export failed: {exc}"}), 400

    workbook = report.build_report_workbook(results, catalog)
    output = io.BytesIO()
    workbook.save(output)
    output.seek(0)
    filename = f"inventory_report_{date.today().isoformat()}.xlsx"

    return Response(
        output.getvalue(),
        mimetype=XLSX_MIMETYPE,
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


if __name__ == "__main__":
    app.run(debug=True)
