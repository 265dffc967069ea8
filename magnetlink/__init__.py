"""magnetlink - Magnet URI parsing for BitTorrent."""

from __future__ import annotations

__version__ = "0.1.0"

from magnetlink.core.hash_value import HashAlgorithm, HashValue
from magnetlink.core.magnet import (
    MagnetLink,
    TorrentMagnetLink,
    as_torrent,
    parse_magnet_link,
    parse_torrent_magnet_link,
)
from magnetlink.core.num_range import NumRange, parse_num_range
from magnetlink.core.urn import Urn, parse_urn
from magnetlink.models import ParseOptions
from magnetlink.utils.exceptions import (
    MagnetLinkError,
    MalformedInputError,
    MalformedMagnetLinkError,
    MalformedNumRangeError,
    MalformedUrnError,
    WrongMagnetLinkTypeError,
)

__all__ = [
    "HashAlgorithm",
    "HashValue",
    "MagnetLink",
    "MagnetLinkError",
    "MalformedInputError",
    "MalformedMagnetLinkError",
    "MalformedNumRangeError",
    "MalformedUrnError",
    "NumRange",
    "ParseOptions",
    "TorrentMagnetLink",
    "Urn",
    "WrongMagnetLinkTypeError",
    "__version__",
    "as_torrent",
    "parse_magnet_link",
    "parse_num_range",
    "parse_torrent_magnet_link",
    "parse_urn",
]
