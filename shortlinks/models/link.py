from sqlalchemy import func
from sqlalchemy.orm import validates

from ..extensions import db

SHORT_CODE_MAX_LENGTH = 20


class Link(db.Model):
    __tablename__ = "links"
    __table_args__ = (
        db.CheckConstraint(
            f"length(short_code) <= {SHORT_CODE_MAX_LENGTH}",
            name="ck_links_short_code_length",
        ),
    )

    id = db.Column(db.Integer, db.Identity(always=True), primary_key=True)
    # Opaque subject id issued by the identity provider; no local users table.
    user_id = db.Column(db.Text, nullable=False, index=True)
    original_url = db.Column(db.Text, nullable=False)
    short_code = db.Column(db.String(SHORT_CODE_MAX_LENGTH), nullable=False, unique=True)
    created_at = db.Column(db.DateTime, nullable=False, server_default=func.now())
    updated_at = db.Column(
        db.DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )

    @validates("user_id")
    def _validate_user_id(self, key, value):
        if self.user_id is not None and value != self.user_id:
            raise ValueError("Link owner cannot be changed")
        return value

    @validates("short_code")
    def _validate_short_code(self, key, value):
        if value is not None and len(value) > SHORT_CODE_MAX_LENGTH:
            raise ValueError(f"Short code longer than {SHORT_CODE_MAX_LENGTH} characters")
        return value

    def __repr__(self):
        return f"<Link {self.short_code} -> {self.original_url}>"
