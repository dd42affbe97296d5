"""Name normalization and certificate domain matching."""

import re

_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]")

WILDCARD_PREFIX = "*."


def normalize(name: str) -> str:
    """
    Normalize a policy name for comparison.

    Lower-cases the name and strips everything outside ``[a-z0-9]`` so
    "Managed-CachingDisabled" and "managed caching disabled" compare equal.
    """
    return _NON_ALPHANUMERIC.sub("", name.lower())


def domain_matches(host: str | None, pattern: str | None) -> bool:
    """
    Check whether a host name is covered by a certificate name.

    Matching is case insensitive. A pattern starting with ``*.`` matches
    the bare base domain as well as any host ending in ``.<base>``, so
    ``*.example.com`` also covers ``a.b.example.com``. That is broader than
    the single-label wildcard rule certificate authorities apply.

    Args:
        host: Host name to look up (e.g. "api.example.com")
        pattern: Certificate domain or subject alternative name

    Returns:
        True if the pattern covers the host
    """
    if not host or not pattern:
        return False

    host = host.lower()
    pattern = pattern.lower()
    if host == pattern:
        return True

    if pattern.startswith(WILDCARD_PREFIX):
        base = pattern[len(WILDCARD_PREFIX) :]
        return host == base or host.endswith(f".{base}")

    return False
