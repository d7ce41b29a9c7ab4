from .link import Link, SHORT_CODE_MAX_LENGTH

__all__ = ["Link", "SHORT_CODE_MAX_LENGTH"]
