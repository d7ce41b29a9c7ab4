from flask import current_app
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from ..errors import InvalidLink, LinkNotFound, ShortCodeExhausted, ShortCodeTaken
from ..extensions import db
from ..models.link import Link, SHORT_CODE_MAX_LENGTH
from ..repositories import link_repository
from ..utils.security import is_unsafe_url, normalize_url, validate_url
from ..utils.short_codes import generate_short_code, validate_custom_code
from . import cache


def _clean_url(original_url) -> str:
    if original_url is not None and not isinstance(original_url, str):
        raise InvalidLink("original_url must be a string")

    url = normalize_url(original_url)
    ok, reason = validate_url(url)
    if not ok:
        raise InvalidLink(reason)

    unsafe, reason = is_unsafe_url(url, current_app.config.get("BLOCKED_DOMAINS"))
    if unsafe:
        raise InvalidLink(reason)
    return url


def _clean_custom_code(short_code) -> str:
    if not isinstance(short_code, str):
        raise InvalidLink("short_code must be a string")

    short_code = short_code.strip()
    ok, reason = validate_custom_code(short_code)
    if not ok:
        raise InvalidLink(reason)
    return short_code


def _insert(link: Link) -> bool:
    """Commit a new link; False when the short code lost a uniqueness race."""
    db.session.add(link)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return False
    return True


def create_link(user_id: str, original_url, short_code=None) -> Link:
    url = _clean_url(original_url)

    if short_code:
        short_code = _clean_custom_code(short_code)
        if link_repository.short_code_exists(short_code):
            raise ShortCodeTaken()
        link = Link(user_id=user_id, original_url=url, short_code=short_code)
        if not _insert(link):
            raise ShortCodeTaken()
    else:
        link = _create_with_generated_code(user_id, url)

    current_app.logger.info(f"Link {link.short_code} created by {user_id}")
    cache.cache_link(link.short_code, link.original_url, link.id)
    return link


def _create_with_generated_code(user_id: str, url: str) -> Link:
    length = int(current_app.config.get("SHORT_CODE_LENGTH", 7))
    attempts = max(1, int(current_app.config.get("SHORT_CODE_MAX_ATTEMPTS", 5)))

    for attempt in range(1, attempts + 1):
        candidate = generate_short_code(length)
        if link_repository.short_code_exists(candidate):
            current_app.logger.debug(f"Short code collision on attempt {attempt}: {candidate}")
            continue

        link = Link(user_id=user_id, original_url=url, short_code=candidate)
        if _insert(link):
            return link
        current_app.logger.debug(f"Short code insert race on attempt {attempt}: {candidate}")

    current_app.logger.error(f"Gave up generating a short code after {attempts} attempts")
    raise ShortCodeExhausted()


def get_link(user_id: str, short_code: str) -> Link:
    link = link_repository.get_owned_link(user_id, short_code)
    if not link:
        raise LinkNotFound()
    return link


def list_links(user_id: str) -> list[Link]:
    return link_repository.list_links_for_user(user_id)


def update_link(user_id: str, short_code: str, original_url=None, new_short_code=None) -> Link:
    """Change the destination and/or short code of a link the caller owns.

    The owner id is never touched here. ``updated_at`` is refreshed by the
    database on every successful update.
    """
    if original_url is None and new_short_code is None:
        raise InvalidLink("Nothing to update: provide original_url or short_code")

    url = _clean_url(original_url) if original_url is not None else None
    code = _clean_custom_code(new_short_code) if new_short_code is not None else None

    link = get_link(user_id, short_code)
    old_code = link.short_code

    if code is not None and code != old_code:
        if link_repository.short_code_exists(code):
            raise ShortCodeTaken()
        link.short_code = code
    if url is not None:
        link.original_url = url

    link.updated_at = func.now()
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ShortCodeTaken()

    current_app.logger.info(f"Link {old_code} updated by {user_id} (now {link.short_code})")
    cache.invalidate_link(old_code, link.short_code)
    cache.cache_link(link.short_code, link.original_url, link.id)
    return link


def delete_link(user_id: str, short_code: str) -> None:
    link = get_link(user_id, short_code)
    db.session.delete(link)
    db.session.commit()

    current_app.logger.info(f"Link {short_code} deleted by {user_id}")
    cache.invalidate_link(short_code)


def resolve_link(short_code: str) -> str:
    """Destination URL for a short code, read through the cache."""
    if not short_code or len(short_code) > SHORT_CODE_MAX_LENGTH:
        raise LinkNotFound()

    cached = cache.get_cached_link(short_code)
    if cached:
        return cached["url"]

    link = link_repository.get_link_by_code(short_code)
    if not link:
        raise LinkNotFound()

    cache.cache_link(link.short_code, link.original_url, link.id, only_if_absent=True)
    return link.original_url
