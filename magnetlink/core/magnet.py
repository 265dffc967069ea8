"""Magnet URI parsing (BEP 53).

This module parses magnet links into an immutable `MagnetLink` and
specializes them into a `TorrentMagnetLink` by decoding the BitTorrent
info-hashes found in ``xt=urn:btih:<hash>`` exact topics.

References:
    https://en.wikipedia.org/wiki/Magnet_URI_scheme
    https://www.bittorrent.org/beps/bep_0053.html
"""

from __future__ import annotations

import base64
import binascii
import re
import urllib.parse
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Mapping

from magnetlink.core.hash_value import HashAlgorithm, HashValue
from magnetlink.core.num_range import NumRange, parse_decimal, parse_num_range
from magnetlink.core.urn import Urn, parse_urn
from magnetlink.models import ParseOptions
from magnetlink.utils.exceptions import (
    MalformedInputError,
    MalformedMagnetLinkError,
    WrongMagnetLinkTypeError,
)
from magnetlink.utils.logging_config import get_logger

logger = get_logger(__name__)

MAGNET_SCHEME = "magnet"
EXPERIMENTAL_PREFIX = "x."
BTIH_NAMESPACE = "btih"

_BAD_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def _empty_mapping() -> Mapping[str, tuple[str, ...]]:
    return MappingProxyType({})


@dataclass(frozen=True)
class MagnetLink:
    """Parsed magnet link.

    Every recognized parameter may repeat in the URI, so each field collects
    all occurrences in input order.
    """

    dn: tuple[str, ...] = ()  # Display name
    xt: tuple[Urn, ...] = ()  # Exact topic
    xl: tuple[int, ...] = ()  # Exact length
    as_: tuple[str, ...] = ()  # Acceptable source
    xs: tuple[str, ...] = ()  # Exact source
    kt: tuple[str, ...] = ()  # Keyword topic
    mt: tuple[str, ...] = ()  # Manifest topic
    tr: tuple[str, ...] = ()  # Tracker address
    so: tuple[NumRange, ...] = ()  # Select only
    # Experimental parameters, keyed without the "x." prefix
    exps: Mapping[str, tuple[str, ...]] = field(
        default_factory=_empty_mapping,
        hash=False,
    )
    # Parameters outside the grammar, only kept in non-strict mode
    unknowns: Mapping[str, tuple[str, ...]] = field(
        default_factory=_empty_mapping,
        hash=False,
    )

    @property
    def display_name(self) -> str | None:
        """First display name, if any."""
        return self.dn[0] if self.dn else None

    def as_torrent(self) -> TorrentMagnetLink:
        """Specialize this link into a `TorrentMagnetLink`."""
        return as_torrent(self)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready rendering of the parsed parameters."""
        return {
            "dn": list(self.dn),
            "xt": [str(urn) for urn in self.xt],
            "xl": list(self.xl),
            "as": list(self.as_),
            "xs": list(self.xs),
            "kt": list(self.kt),
            "mt": list(self.mt),
            "tr": list(self.tr),
            "so": [str(num_range) for num_range in self.so],
            "exps": {key: list(values) for key, values in self.exps.items()},
            "unknowns": {key: list(values) for key, values in self.unknowns.items()},
        }


@dataclass
class _MagnetLinkBuilder:
    """Mutable accumulator used while a single parse call is in progress."""

    dn: list[str] = field(default_factory=list)
    xt: list[Urn] = field(default_factory=list)
    xl: list[int] = field(default_factory=list)
    as_: list[str] = field(default_factory=list)
    xs: list[str] = field(default_factory=list)
    kt: list[str] = field(default_factory=list)
    mt: list[str] = field(default_factory=list)
    tr: list[str] = field(default_factory=list)
    so: list[NumRange] = field(default_factory=list)
    exps: dict[str, list[str]] = field(default_factory=dict)
    unknowns: dict[str, list[str]] = field(default_factory=dict)

    def build(self) -> MagnetLink:
        return MagnetLink(
            dn=tuple(self.dn),
            xt=tuple(self.xt),
            xl=tuple(self.xl),
            as_=tuple(self.as_),
            xs=tuple(self.xs),
            kt=tuple(self.kt),
            mt=tuple(self.mt),
            tr=tuple(self.tr),
            so=tuple(self.so),
            exps=MappingProxyType(
                {key: tuple(values) for key, values in self.exps.items()}
            ),
            unknowns=MappingProxyType(
                {key: tuple(values) for key, values in self.unknowns.items()}
            ),
        )


class _Param(Enum):
    """Closed set of parameter kinds in the magnet grammar."""

    DN = "dn"
    XT = "xt"
    XL = "xl"
    AS = "as"
    XS = "xs"
    KT = "kt"
    MT = "mt"
    TR = "tr"
    SO = "so"
    EXPERIMENTAL = "x."
    UNKNOWN = ""


_PLAIN_PARAMS: dict[str, _Param] = {
    param.value: param
    for param in (
        _Param.DN,
        _Param.XL,
        _Param.AS,
        _Param.XS,
        _Param.KT,
        _Param.MT,
        _Param.TR,
        _Param.SO,
    )
}


def _is_exact_topic_key(key: str) -> bool:
    """Match ``xt`` or ``xt.<N>`` where N is a decimal integer."""
    if key == "xt":
        return True
    if not key.startswith("xt."):
        return False
    try:
        parse_decimal(key[3:])
    except ValueError:
        return False
    return True


def _classify(key: str) -> _Param:
    """Classify a lower-cased query key."""
    if _is_exact_topic_key(key):
        return _Param.XT
    param = _PLAIN_PARAMS.get(key)
    if param is not None:
        return param
    if key.startswith(EXPERIMENTAL_PREFIX):
        return _Param.EXPERIMENTAL
    return _Param.UNKNOWN


def query_unescape(value: str) -> str:
    """Decode ``application/x-www-form-urlencoded`` text strictly.

    ``+`` becomes a space and ``%XX`` escapes are decoded as UTF-8.

    Raises:
        ValueError: If a ``%`` is not followed by two hex digits, or the
            decoded bytes are not valid UTF-8 (`UnicodeDecodeError`).

    """
    match = _BAD_ESCAPE_RE.search(value)
    if match:
        bad = value[match.start() : match.start() + 3]
        msg = f"invalid URL escape {bad!r}"
        raise ValueError(msg)
    return urllib.parse.unquote_plus(value, errors="strict")


def _split_uri(uri: str) -> urllib.parse.SplitResult:
    for ch in uri:
        if ord(ch) < 0x20 or ord(ch) == 0x7F:
            msg = "invalid control character in URL"
            raise MalformedMagnetLinkError(msg)
    # urlsplit would strip leading spaces before looking for the scheme
    if uri.startswith(" "):
        msg = "invalid scheme"
        raise MalformedMagnetLinkError(msg)
    try:
        return urllib.parse.urlsplit(uri)
    except ValueError as e:
        msg = "invalid URI"
        raise MalformedMagnetLinkError(msg, e) from e


def _decompose_query(query: str) -> dict[str, list[str]]:
    """Group decoded query values by decoded key, keeping input order.

    Empty ``&``-separated segments are skipped and a pair without ``=``
    gets an empty value.
    """
    params: dict[str, list[str]] = {}
    for pair in query.split("&"):
        if not pair:
            continue
        key, _, value = pair.partition("=")
        try:
            key = query_unescape(key)
            value = query_unescape(value)
        except ValueError as e:
            msg = "invalid query"
            raise MalformedMagnetLinkError(msg, e) from e
        params.setdefault(key, []).append(value)
    return params


def _collect(
    builder: _MagnetLinkBuilder,
    key: str,
    values: list[str],
    options: ParseOptions,
) -> None:
    """Route the values of one lower-cased key into the builder."""
    param = _classify(key)

    if param is _Param.DN:
        builder.dn.extend(values)
    elif param is _Param.XT:
        for value in values:
            try:
                builder.xt.append(parse_urn(value))
            except MalformedInputError as e:
                msg = "invalid xt"
                raise MalformedMagnetLinkError(msg, e) from e
    elif param is _Param.XL:
        for value in values:
            try:
                builder.xl.append(parse_decimal(value))
            except ValueError as e:
                msg = "invalid xl"
                raise MalformedMagnetLinkError(msg, e) from e
    elif param is _Param.AS:
        builder.as_.extend(_unescape_all(values, "invalid as"))
    elif param is _Param.XS:
        builder.xs.extend(values)
    elif param is _Param.KT:
        builder.kt.extend(values)
    elif param is _Param.MT:
        builder.mt.extend(values)
    elif param is _Param.TR:
        builder.tr.extend(_unescape_all(values, "invalid tr"))
    elif param is _Param.SO:
        for value in values:
            for segment in value.split(","):
                try:
                    builder.so.append(parse_num_range(segment))
                except MalformedInputError as e:
                    msg = "invalid so"
                    raise MalformedMagnetLinkError(msg, e) from e
    elif param is _Param.EXPERIMENTAL:
        name = key[len(EXPERIMENTAL_PREFIX) :]
        if not name:
            msg = "invalid experimental parameter"
            raise MalformedMagnetLinkError(msg)
        builder.exps.setdefault(name, []).extend(values)
    elif param is _Param.UNKNOWN:
        if options.strict:
            msg = "unknown parameters"
            raise MalformedMagnetLinkError(msg)
        logger.debug("Keeping unknown magnet parameter %r", key)
        builder.unknowns.setdefault(key, []).extend(values)


def _unescape_all(values: list[str], reason: str) -> list[str]:
    # Values were already decoded once by the query decomposition
    unescaped = []
    for value in values:
        try:
            unescaped.append(query_unescape(value))
        except ValueError as e:
            raise MalformedMagnetLinkError(reason, e) from e
    return unescaped


def parse_magnet_link(uri: str, options: ParseOptions | None = None) -> MagnetLink:
    """Parse a magnet URI and return a `MagnetLink`.

    Supports: dn, xt / xt.N, xl, as, xs, kt, mt, tr, so and x.<name>
    experimental parameters. Anything else is collected into
    ``unknowns``, or rejected when ``options.strict`` is set.

    Raises:
        MalformedMagnetLinkError: On any syntactic problem. Parsing is
            all-or-nothing.

    """
    if options is None:
        options = ParseOptions()

    parsed = _split_uri(uri)
    if parsed.scheme.lower() != MAGNET_SCHEME:
        msg = "invalid scheme"
        raise MalformedMagnetLinkError(msg)

    params = _decompose_query(parsed.query)
    builder = _MagnetLinkBuilder()
    for key, values in params.items():
        _collect(builder, key.lower(), values, options)

    logger.debug("Parsed magnet link with %d parameter key(s)", len(params))
    return builder.build()


def _decode_base32(text: str) -> bytes:
    return base64.b32decode(text, casefold=True)


# Character length of the encoded btih -> (algorithm, decoder)
_BTIH_DECODERS: dict[int, tuple[HashAlgorithm, Callable[[str], bytes]]] = {
    32: (HashAlgorithm.SHA1, _decode_base32),
    40: (HashAlgorithm.SHA1, binascii.unhexlify),
    56: (HashAlgorithm.SHA256, _decode_base32),
    64: (HashAlgorithm.SHA256, binascii.unhexlify),
}


def decode_btih(nss: str) -> HashValue:
    """Decode the namespace specific string of a ``urn:btih`` topic.

    The encoding is chosen by length: 32 (SHA-1, base32), 40 (SHA-1, hex),
    56 (SHA-256, base32) or 64 (SHA-256, hex) characters.

    Raises:
        MalformedMagnetLinkError: If the length is not one of the above or
            the characters are invalid for the chosen encoding.

    """
    decoder = _BTIH_DECODERS.get(len(nss))
    if decoder is None:
        msg = "cannot decode btih: bad length"
        raise MalformedMagnetLinkError(msg)
    algorithm, decode = decoder
    try:
        value = decode(nss)
    except (binascii.Error, ValueError) as e:
        msg = "cannot decode btih"
        raise MalformedMagnetLinkError(msg, e) from e
    return HashValue(algorithm=algorithm, value=value)


@dataclass(frozen=True)
class TorrentMagnetLink:
    """A magnet link that identifies a torrent.

    Wraps the `MagnetLink` it was specialized from, without copying it, and
    adds the decoded info-hashes. Attributes of the wrapped link (``dn``,
    ``tr``, ...) are readable directly on this object. Build it with
    `as_torrent` or `parse_torrent_magnet_link`.
    """

    magnet_link: MagnetLink
    info_hashes: tuple[HashValue, ...]

    @property
    def info_hash(self) -> HashValue:
        """First info-hash in exact topic order."""
        return self.info_hashes[0]

    def __getattr__(self, name: str) -> Any:
        magnet_link = self.__dict__.get("magnet_link")
        if magnet_link is None:
            raise AttributeError(name)
        return getattr(magnet_link, name)


def as_torrent(magnet_link: MagnetLink) -> TorrentMagnetLink:
    """Decode the btih exact topics of ``magnet_link``.

    Raises:
        MalformedMagnetLinkError: If a btih value cannot be decoded.
        WrongMagnetLinkTypeError: If there is no btih exact topic.

    """
    info_hashes = [
        decode_btih(urn.nss)
        for urn in magnet_link.xt
        if urn.nid.lower() == BTIH_NAMESPACE
    ]
    if not info_hashes:
        msg = "Wrong magnet link type: no torrent"
        raise WrongMagnetLinkTypeError(msg)

    logger.debug("Decoded %d info-hash(es) from magnet link", len(info_hashes))
    return TorrentMagnetLink(magnet_link=magnet_link, info_hashes=tuple(info_hashes))


def parse_torrent_magnet_link(
    uri: str,
    options: ParseOptions | None = None,
) -> TorrentMagnetLink:
    """Parse a magnet URI and specialize it into a `TorrentMagnetLink`."""
    return as_torrent(parse_magnet_link(uri, options))
