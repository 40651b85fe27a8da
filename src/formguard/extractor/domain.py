"""Email address helpers used by the sender heuristics."""

from __future__ import annotations

import ipaddress
import re
from email.utils import parseaddr

HOST_RE = re.compile(r"^[A-Za-z0-9.-]+$")


def email_domain(address: str) -> str | None:
    """Return the full, lower-cased host part of an email address."""

    email_addr = _bare_address(address)
    if not email_addr or "@" not in email_addr:
        return None
    return _normalize_host(email_addr.rsplit("@", 1)[1])


def _bare_address(address: str) -> str:
    _, email_addr = parseaddr(address or "")
    if not email_addr and address:
        if "<" in address and ">" in address:
            email_addr = address.split("<", 1)[1].split(">", 1)[0].strip()
        else:
            email_addr = address.strip()
    return email_addr


def _normalize_host(host: str | None) -> str | None:
    if not host:
        return None
    candidate = host.strip().lower().rstrip(".")
    if candidate.startswith("[") and candidate.endswith("]"):
        candidate = candidate[1:-1]
    if not candidate:
        return None

    # IPv4/IPv6 literals retain their exact string.
    try:
        ipaddress.ip_address(candidate)
        return candidate
    except ValueError:
        pass

    if not HOST_RE.match(candidate):
        return None
    labels = [label for label in candidate.split(".") if label]
    if not labels:
        return None
    return ".".join(labels)


__all__ = ["email_domain"]
