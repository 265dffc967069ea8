"""Core magnet link grammar.

This module contains the parsers for:
- URNs
- Number ranges
- Magnet links and their torrent specialization
"""

from __future__ import annotations

from magnetlink.core.hash_value import HashAlgorithm, HashValue
from magnetlink.core.magnet import (
    MagnetLink,
    TorrentMagnetLink,
    as_torrent,
    decode_btih,
    parse_magnet_link,
    parse_torrent_magnet_link,
)
from magnetlink.core.num_range import NumRange, parse_num_range
from magnetlink.core.urn import Urn, parse_urn

__all__ = [
    # Hash
    "HashAlgorithm",
    "HashValue",
    # Magnet
    "MagnetLink",
    # Range
    "NumRange",
    "TorrentMagnetLink",
    # Urn
    "Urn",
    "as_torrent",
    "decode_btih",
    "parse_magnet_link",
    "parse_num_range",
    "parse_torrent_magnet_link",
    "parse_urn",
]
