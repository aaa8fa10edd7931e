"""Checksum algorithm table and incremental hashers."""

from __future__ import annotations

import functools
import hashlib
from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable, Mapping, Protocol

from .exceptions import UnsupportedAlgorithmError


class Hasher(Protocol):
    """Accepts bytes incrementally and produces a hex digest."""

    def update(self, data: bytes) -> None: ...

    def hexdigest(self) -> str: ...


class _ShakeHasher:
    """Fixed-length wrapper around the extendable-output SHAKE functions."""

    def __init__(self, name: str, length: int):
        self._hash = hashlib.new(name)
        self._length = length

    def update(self, data: bytes) -> None:
        self._hash.update(data)

    def hexdigest(self) -> str:
        return self._hash.hexdigest(self._length)


def _named(name: str) -> Callable[[], Any]:
    return functools.partial(hashlib.new, name)


HASH_ALGORITHMS: Mapping[str, Callable[[], Hasher]] = MappingProxyType(
    {
        "blake2b256": functools.partial(hashlib.blake2b, digest_size=32),
        "blake2b512": hashlib.blake2b,
        "md4": _named("md4"),
        "md5": _named("md5"),
        "ripemd160": _named("ripemd160"),
        "sha1": _named("sha1"),
        "sha224": _named("sha224"),
        "sha256": _named("sha256"),
        "sha384": _named("sha384"),
        "sha512": _named("sha512"),
        "sha512-224": _named("sha512_224"),
        "sha512-256": _named("sha512_256"),
        "sha3-224": _named("sha3_224"),
        "sha3-256": _named("sha3_256"),
        "sha3-384": _named("sha3_384"),
        "sha3-512": _named("sha3_512"),
        "shake128": functools.partial(_ShakeHasher, "shake_128", 16),
        "shake256": functools.partial(_ShakeHasher, "shake_256", 32),
    }
)


def new_hasher(
    algorithm: str, algorithms: Mapping[str, Callable[[], Hasher]] = HASH_ALGORITHMS
) -> Hasher:
    """Return a fresh hasher for ``algorithm``."""

    factory = algorithms.get(algorithm)
    if factory is None:
        raise UnsupportedAlgorithmError(f"Unsupported checksum algorithm: {algorithm}")
    try:
        return factory()
    except ValueError as exc:
        # hashlib raises ValueError when OpenSSL does not ship the digest.
        raise UnsupportedAlgorithmError(
            f"Checksum algorithm {algorithm} is not available on this system"
        ) from exc


def algorithm_from_path(
    path: str | Path, algorithms: Mapping[str, Callable[[], Hasher]] = HASH_ALGORITHMS
) -> str:
    """Return the algorithm named by the extension of a checksum file."""

    name = Path(path).name
    algorithm = name.rsplit(".", 1)[-1] if "." in name else ""
    if algorithm not in algorithms:
        raise UnsupportedAlgorithmError(
            f"Unsupported checksum file extension: {name}"
        )
    return algorithm


def available_algorithms(
    algorithms: Mapping[str, Callable[[], Hasher]] = HASH_ALGORITHMS,
) -> list[str]:
    """Return the identifiers that can actually be constructed here."""

    available = []
    for algorithm in algorithms:
        try:
            new_hasher(algorithm, algorithms)
        except UnsupportedAlgorithmError:
            continue
        available.append(algorithm)
    return available
