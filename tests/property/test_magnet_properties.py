"""Property-based tests for magnet link parsing.

Tests invariants of the URN, number range and magnet link parsers
using Hypothesis for automatic test case generation.
"""

import base64
from urllib.parse import urlencode

import pytest
from hypothesis import given
from hypothesis import strategies as st

from magnetlink import (
    HashAlgorithm,
    MalformedUrnError,
    NumRange,
    parse_magnet_link,
    parse_num_range,
    parse_torrent_magnet_link,
    parse_urn,
)

pytestmark = [pytest.mark.property]

no_colon_text = st.text(alphabet=st.characters(exclude_characters=":"))
query_text = st.text(alphabet=st.characters(exclude_categories=("Cs",)))
urn_schemes = st.sampled_from(["urn", "URN", "Urn", "uRN"])


class TestUrnProperties:
    """Property-based tests for parse_urn."""

    @given(urn_schemes, no_colon_text, no_colon_text)
    def test_three_parts_parse(self, scheme, nid, nss):
        urn = parse_urn(f"{scheme}:{nid}:{nss}")
        assert urn.nid == nid
        assert urn.nss == nss

    @given(st.lists(no_colon_text, min_size=1).filter(lambda parts: len(parts) != 3))
    def test_other_part_counts_fail(self, parts):
        with pytest.raises(MalformedUrnError):
            parse_urn(":".join(parts))

    @given(no_colon_text.filter(lambda s: s.lower() != "urn"), no_colon_text, no_colon_text)
    def test_other_schemes_fail(self, scheme, nid, nss):
        with pytest.raises(MalformedUrnError):
            parse_urn(f"{scheme}:{nid}:{nss}")


class TestNumRangeProperties:
    """Property-based tests for parse_num_range."""

    @given(st.integers(min_value=0))
    def test_single_number(self, n):
        assert parse_num_range(str(n)) == NumRange(n, n, True, True)

    @given(st.integers(min_value=0), st.integers(min_value=0))
    def test_interval(self, a, b):
        assert parse_num_range(f"{a}-{b}") == NumRange(a, b, True, True)


class TestMagnetLinkProperties:
    """Property-based tests for parse_magnet_link."""

    @given(st.lists(query_text))
    def test_display_names_survive_encoding(self, names):
        uri = "magnet:?" + urlencode([("dn", name) for name in names])
        assert parse_magnet_link(uri).dn == tuple(names)

    @given(st.lists(st.integers(min_value=0)))
    def test_exact_lengths(self, lengths):
        uri = "magnet:?" + urlencode([("xl", length) for length in lengths])
        assert parse_magnet_link(uri).xl == tuple(lengths)

    @given(
        st.lists(
            st.tuples(st.sampled_from(["dn", "kt", "x.k", "other"]), query_text),
        )
    )
    def test_parsing_is_idempotent(self, pairs):
        uri = "magnet:?" + urlencode(pairs)
        assert parse_magnet_link(uri) == parse_magnet_link(uri)


class TestInfoHashProperties:
    """Property-based tests for btih decoding."""

    @given(st.binary(min_size=20, max_size=20), st.booleans())
    def test_sha1_hex(self, digest, upper):
        encoded = digest.hex().upper() if upper else digest.hex()
        torrent = parse_torrent_magnet_link(f"magnet:?xt=urn:btih:{encoded}")
        assert torrent.info_hash.algorithm is HashAlgorithm.SHA1
        assert torrent.info_hash.value == digest

    @given(st.binary(min_size=20, max_size=20))
    def test_sha1_base32(self, digest):
        encoded = base64.b32encode(digest).decode()
        torrent = parse_torrent_magnet_link(f"magnet:?xt=urn:btih:{encoded}")
        assert torrent.info_hash.value == digest

    @given(st.binary(min_size=32, max_size=32))
    def test_sha256_hex(self, digest):
        torrent = parse_torrent_magnet_link(f"magnet:?xt=urn:btih:{digest.hex()}")
        assert torrent.info_hash.algorithm is HashAlgorithm.SHA256
        assert torrent.info_hash.value == digest
