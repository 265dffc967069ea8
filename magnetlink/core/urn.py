"""Uniform Resource Name parsing.

Only the structural shape ``urn:<nid>:<nss>`` is checked. The namespace id
and namespace specific string are kept verbatim: no percent-decoding and no
character-set validation.

See https://en.wikipedia.org/wiki/Uniform_Resource_Name
"""

from __future__ import annotations

from dataclasses import dataclass

from magnetlink.utils.exceptions import MalformedUrnError


@dataclass(frozen=True)
class Urn:
    """A parsed URN."""

    nid: str  # Namespace identifier
    nss: str  # Interpretation depends on the namespace

    def __str__(self) -> str:
        return f"urn:{self.nid}:{self.nss}"


def parse_urn(text: str) -> Urn:
    """Parse ``urn:<nid>:<nss>`` into a `Urn`.

    Raises:
        MalformedUrnError: If the text does not have exactly three
            colon-separated parts or does not start with ``urn``.

    """
    parts = text.split(":")
    if len(parts) != 3:
        raise MalformedUrnError
    scheme, nid, nss = parts
    if scheme.lower() != "urn":
        msg = "invalid scheme"
        raise MalformedUrnError(msg)
    return Urn(nid=nid, nss=nss)
