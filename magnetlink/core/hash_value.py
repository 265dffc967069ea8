"""Tagged digest values."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class HashAlgorithm(str, Enum):
    """Digest algorithms an info-hash may use."""

    SHA1 = "sha1"
    SHA256 = "sha256"


@dataclass(frozen=True)
class HashValue:
    """A digest together with the algorithm that produced it."""

    algorithm: HashAlgorithm
    value: bytes

    def hex(self) -> str:
        """Return the digest as lowercase hex."""
        return self.value.hex()

    def __str__(self) -> str:
        return f"{self.algorithm.value}:{self.hex()}"
