from flask import Blueprint, redirect

from ..services import link_service

redirect_bp = Blueprint("redirect", __name__)


@redirect_bp.route("/<short_code>")
def redirection(short_code):
    # LinkNotFound falls through to the 404 envelope
    long_url = link_service.resolve_link(short_code)
    return redirect(long_url, code=302)
