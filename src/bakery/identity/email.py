"""Structural check for email addresses."""

_FORBIDDEN = set(';,()":<>[]\\')


def is_valid_email(address: str | None) -> bool:
    """Return True when ``address`` looks like a deliverable mailbox.

    Exactly one ``@``, no whitespace, a local part and a dotted domain, no
    empty labels and no characters that need quoting.
    """
    if not address or any(ch.isspace() for ch in address):
        return False

    if address.count("@") != 1 or _FORBIDDEN.intersection(address):
        return False

    local, domain = address.split("@")
    if not local or local[0] == "." or local[-1] == "." or ".." in local:
        return False

    labels = domain.split(".")
    if len(labels) < 2:
        return False

    return all(label and not label.startswith("-") and not label.endswith("-") for label in labels)
