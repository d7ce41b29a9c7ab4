from ..utils.short_codes import build_short_url


def serialize_link(link) -> dict:
    return {
        "id": link.id,
        "user_id": link.user_id,
        "short_code": link.short_code,
        "short_url": build_short_url(link.short_code),
        "original_url": link.original_url,
        "created_at": link.created_at.isoformat() if link.created_at else None,
        "updated_at": link.updated_at.isoformat() if link.updated_at else None,
    }
