"""HTTP routes for creating, reading and managing scripts."""
from __future__ import annotations

from flask import Response, abort, current_app, jsonify, request

from .. import get_store
from ..forms import OwnerForm, ScriptForm
from ..store.pagination import parse_int
from . import scripts_bp


@scripts_bp.before_request
def require_json_object():
    """Forms can only read JSON bodies that decode to an object."""
    if request.is_json and request.method in {"POST", "PUT", "PATCH", "DELETE"}:
        payload = request.get_json(silent=True)
        if payload is not None and not isinstance(payload, dict):
            abort(400, description="JSON body must be an object.")


def _requester() -> str | None:
    """Owner identity from the request body, falling back to ``?owner=``."""
    form = OwnerForm()
    return form.owner.data or request.args.get("owner")


@scripts_bp.get("/")
def index():
    return current_app.send_static_file("index.html")


@scripts_bp.post("/scripts")
def create_script():
    data = ScriptForm().to_input()
    created = get_store().create(data.content, data.owner, data.filename, data.description)
    current_app.logger.info("Script %s created via API", created.record.id)
    return (
        jsonify(
            id=created.record.id,
            script=created.record.to_dict(),
            links=created.links.to_dict(),
        ),
        201,
    )


@scripts_bp.get("/scripts")
def list_scripts():
    config = current_app.config
    page = get_store().list(
        page=parse_int(request.args.get("page"), 1),
        limit=parse_int(request.args.get("limit"), config["SCRIPTS_PER_PAGE"]),
    )
    return jsonify(
        items=[summary.to_dict() for summary in page.items],
        total=page.total,
        page=page.page,
        limit=page.limit,
        pages=page.pages,
    )


@scripts_bp.get("/raw/<string:script_id>")
def raw_script(script_id: str):
    raw = get_store().get_raw(script_id, viewer=request.args.get("user"))
    return Response(raw.content, mimetype=raw.content_type)


@scripts_bp.get("/view/<string:script_id>")
def view_script(script_id: str):
    return jsonify(get_store().get_metadata(script_id).to_dict())


@scripts_bp.get("/edit/<string:script_id>")
def edit_form(script_id: str):
    record = get_store().get_for_edit(script_id, request.args.get("owner"))
    return jsonify(record.to_dict())


@scripts_bp.route("/edit/<string:script_id>", methods=["POST", "PUT"])
def update_script(script_id: str):
    data = ScriptForm().to_input()
    record = get_store().update(
        script_id,
        data.owner or request.args.get("owner"),
        data.content,
        data.filename,
        data.description,
    )
    return jsonify(record.to_dict())


@scripts_bp.delete("/scripts/<string:script_id>")
def delete_script(script_id: str):
    get_store().delete(script_id, _requester())
    return jsonify(deleted=script_id)


@scripts_bp.get("/stats")
def stats():
    return jsonify(get_store().stats().to_dict())
