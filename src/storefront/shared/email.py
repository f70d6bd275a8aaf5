"""Structural email address checks shared by user registration and product requests."""

_FORBIDDEN = (";", ",", "(", ")", '"', ":", "<", ">", "[", "]", "\\")


def normalize_email(email: str) -> str:
    return email.strip().lower()


def is_valid_email(email: str | None) -> bool:
    """True when the address has one ``@``, a dotted domain and no forbidden characters."""
    if not email or any(ch.isspace() for ch in email):
        return False
    if email.count("@") != 1:
        return False

    local_part, domain_part = email.split("@", 1)
    if not local_part or local_part.startswith(".") or local_part.endswith("."):
        return False
    if not domain_part or "." not in domain_part:
        return False
    if domain_part.startswith(".") or domain_part.endswith("."):
        return False
    if ".." in email:
        return False
    if any(label.startswith("-") or label.endswith("-") for label in domain_part.split(".")):
        return False
    return not any(ch in email for ch in _FORBIDDEN)
