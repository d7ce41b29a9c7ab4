from typing import Optional

from ..extensions import db
from ..models.link import Link


def get_link_by_code(short_code: str) -> Optional[Link]:
    return Link.query.filter_by(short_code=short_code).first()


def get_owned_link(user_id: str, short_code: str) -> Optional[Link]:
    return Link.query.filter_by(short_code=short_code, user_id=user_id).first()


def short_code_exists(short_code: str) -> bool:
    return db.session.query(Link.query.filter_by(short_code=short_code).exists()).scalar()


def list_links_for_user(user_id: str) -> list[Link]:
    return (
        Link.query.filter_by(user_id=user_id)
        .order_by(Link.created_at.desc(), Link.id.desc())
        .all()
    )
