from flask import Blueprint, request

from ..errors import InvalidLink
from ..schemas.link_schema import serialize_link
from ..services import link_service
from ..utils.auth import token_required
from ..utils.response import api_response

links_bp = Blueprint("links", __name__)


def _json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidLink("Request body must be a JSON object")
    return data


@links_bp.route("", methods=["POST"])
@token_required
def create_link(current_user_id):
    data = _json_body()
    link = link_service.create_link(
        current_user_id,
        data.get("original_url"),
        short_code=data.get("short_code"),
    )
    return api_response(True, "Short URL created successfully.", serialize_link(link), 201)


@links_bp.route("", methods=["GET"])
@token_required
def list_links(current_user_id):
    links = link_service.list_links(current_user_id)
    return api_response(True, "Links fetched", {
        "total": len(links),
        "links": [serialize_link(link) for link in links],
    })


@links_bp.route("/<short_code>", methods=["GET"])
@token_required
def get_link(current_user_id, short_code):
    link = link_service.get_link(current_user_id, short_code)
    return api_response(True, "Link fetched", serialize_link(link))


@links_bp.route("/<short_code>", methods=["PUT", "PATCH"])
@token_required
def update_link(current_user_id, short_code):
    data = _json_body()
    # user_id in the body is ignored; ownership never moves
    link = link_service.update_link(
        current_user_id,
        short_code,
        original_url=data.get("original_url"),
        new_short_code=data.get("short_code"),
    )
    return api_response(True, "Link updated successfully.", serialize_link(link))


@links_bp.route("/<short_code>", methods=["DELETE"])
@token_required
def delete_link(current_user_id, short_code):
    link_service.delete_link(current_user_id, short_code)
    return api_response(True, f"Short URL '{short_code}' deleted successfully.", None)
