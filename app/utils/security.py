"""
Security utilities for the OG image service.

Provides HMAC request signing/verification for the image endpoint and
host checks that keep image fetches away from internal addresses.
"""

import hashlib
import hmac
import ipaddress
import operator
from typing import Callable, Iterable, List, Tuple
from urllib.parse import parse_qsl, quote, urlencode, urlsplit

from ..core.config import Settings

SIGNATURE_PARAM = "sig"

# Signed in place of an empty parameter set. Signers must use the same value.
EMPTY_CANONICAL_PAYLOAD = "__empty__"

# Characters left unescaped by JavaScript's encodeURIComponent.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def is_private_ip(host: str) -> bool:
    """
    Check if a host is a private/internal IP address.

    Args:
        host: Hostname or IP address

    Returns:
        True if host is a private IP, False otherwise
    """
    try:
        ip = ipaddress.ip_address(host.strip("[]"))
        return ip.is_private or ip.is_loopback or ip.is_link_local or ip.is_reserved
    except ValueError:
        # Hostnames are not resolved here
        return False


def is_blocked_host(host: str) -> bool:
    """
    Check if a host must never be fetched: ``localhost`` or a literal
    private/internal IP address. DNS names are not resolved, so a public
    name pointing at an internal address is not caught.
    """
    hostname = (host or "").strip().rstrip(".").lower()
    return hostname == "localhost" or hostname.endswith(".localhost") or is_private_ip(hostname)


def _encode_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def canonicalize(params: Iterable[Tuple[str, str]]) -> str:
    """
    Build the deterministic string that gets signed.

    The signature parameter is dropped, the remaining pairs are sorted by
    key and then value (code point order) and percent-encoded.

    Args:
        params: Query parameters as (key, value) pairs

    Returns:
        Canonical payload, or EMPTY_CANONICAL_PAYLOAD when nothing is left
    """
    entries = sorted((key, value) for key, value in params if key != SIGNATURE_PARAM)
    if not entries:
        return EMPTY_CANONICAL_PAYLOAD
    return "&".join(f"{_encode_component(key)}={_encode_component(value)}" for key, value in entries)


def sign_payload(payload: str, secret: str) -> str:
    return hmac.new(secret.encode("utf-8"), payload.encode("utf-8"), hashlib.sha256).hexdigest()


def sign_params(params: Iterable[Tuple[str, str]], secret: str) -> str:
    """Return the lowercase hex signature for a parameter set."""
    return sign_payload(canonicalize(params), secret)


def build_signed_query(params: Iterable[Tuple[str, str]], secret: str) -> str:
    """
    Encode params as a query string with the matching `sig` appended.

    Any `sig` already present in params is replaced.
    """
    pairs: List[Tuple[str, str]] = [(key, value) for key, value in params if key != SIGNATURE_PARAM]
    pairs.append((SIGNATURE_PARAM, sign_params(pairs, secret)))
    return urlencode(pairs)


def constant_time_equals(
    expected: str,
    provided: str,
    *,
    _xor: Callable[[int, int], int] = operator.xor,
) -> bool:
    """
    Compare two strings without short-circuiting on the first mismatch.

    Length is not secret, so unequal lengths return early. Equal lengths
    are always compared over every character.
    """
    if len(expected) != len(provided):
        return False
    acc = 0
    for left, right in zip(expected, provided):
        acc |= _xor(ord(left), ord(right))
    return acc == 0


def verify_request_signature(request_url: str, settings: Settings) -> bool:
    """
    Check the `sig` query parameter of an image request.

    Args:
        request_url: Full request URL including the query string
        settings: Process configuration holding the secret and the flag

    Returns:
        True when protection is off or the signature matches. Every failure
        (missing, blank or wrong signature, missing secret) is just False so
        callers cannot tell them apart.
    """
    if not settings.SIGNATURE_PROTECTION:
        return True

    params = parse_qsl(urlsplit(request_url).query, keep_blank_values=True)
    provided = next((value for key, value in params if key == SIGNATURE_PARAM), "").strip()
    if not provided:
        return False
    if not settings.SIGNATURE_SECRET:
        return False

    expected = sign_params(params, settings.SIGNATURE_SECRET)
    return constant_time_equals(expected, provided)
