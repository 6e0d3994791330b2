"""Join/exit user data encoding for Station pools.

User data is ABI-encoded the same way the pool contract expects it: a leading
uint256 tag followed by the kind-specific payload.

    join 0 (Init)            -> (uint256 tag, uint256[] amounts_in)
    join 1 (ProportionalIn)  -> (uint256 tag, uint256 bpt_amount_out)
    exit 0 (ProportionalOut) -> (uint256 tag, uint256[] amounts_out)

Payloads are decoded once into frozen dataclasses so the pool dispatches on a
closed set of types instead of raw tags.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

import structlog
from eth_abi import decode, encode  # type: ignore[attr-defined]
from eth_abi.exceptions import DecodingError, EncodingError

from station.errors import InvalidPayload

logger = structlog.get_logger()

# Size of one ABI word; the tag always occupies the first one
WORD_SIZE = 32


class JoinKind(IntEnum):
    """Tag values for join user data."""

    INIT = 0
    PROPORTIONAL_IN = 1


class ExitKind(IntEnum):
    """Tag values for exit user data."""

    PROPORTIONAL_OUT = 0


@dataclass(frozen=True)
class JoinInit:
    """First deposit into an empty pool, with explicit per-token amounts."""

    amounts_in: tuple[int, ...]

    kind = JoinKind.INIT


@dataclass(frozen=True)
class JoinProportionalIn:
    """Proportional deposit sized to mint exactly bpt_amount_out."""

    bpt_amount_out: int

    kind = JoinKind.PROPORTIONAL_IN


@dataclass(frozen=True)
class ExitProportionalOut:
    """Withdrawal of explicit per-token amounts, paid for in BPT."""

    amounts_out: tuple[int, ...]

    kind = ExitKind.PROPORTIONAL_OUT


JoinRequest = JoinInit | JoinProportionalIn
ExitRequest = ExitProportionalOut


def _encode(types: list[str], values: list) -> bytes:
    try:
        return encode(types, values)
    except EncodingError as err:
        raise InvalidPayload(f"Cannot encode {values} as {types}: {err}") from err


def encode_join(join: JoinRequest) -> bytes:
    """Encode join user data.

    Raises:
        InvalidPayload: If an amount does not fit in uint256
    """
    if isinstance(join, JoinInit):
        return _encode(["uint256", "uint256[]"], [int(join.kind), list(join.amounts_in)])
    return _encode(["uint256", "uint256"], [int(join.kind), join.bpt_amount_out])


def encode_exit(exit_: ExitRequest) -> bytes:
    """Encode exit user data."""
    return _encode(["uint256", "uint256[]"], [int(exit_.kind), list(exit_.amounts_out)])


def _decode_tag(data: bytes) -> int:
    if len(data) < WORD_SIZE:
        raise InvalidPayload(f"User data too short: {len(data)} bytes")
    (tag,) = decode(["uint256"], data[:WORD_SIZE])
    return tag


def _decode_body(types: list[str], data: bytes) -> tuple:
    try:
        return decode(types, data)
    except DecodingError as err:
        raise InvalidPayload(f"Malformed user data for {types}: {err}") from err


def decode_join(data: bytes) -> JoinRequest:
    """Decode join user data.

    Raises:
        InvalidPayload: If the tag is unknown or the payload is malformed
    """
    tag = _decode_tag(data)
    if tag == JoinKind.INIT:
        _, amounts_in = _decode_body(["uint256", "uint256[]"], data)
        return JoinInit(amounts_in=tuple(amounts_in))
    if tag == JoinKind.PROPORTIONAL_IN:
        _, bpt_amount_out = _decode_body(["uint256", "uint256"], data)
        return JoinProportionalIn(bpt_amount_out=bpt_amount_out)

    logger.warning("join_unknown_kind", tag=tag)
    raise InvalidPayload(f"Unknown join kind: {tag}")


def decode_exit(data: bytes) -> ExitRequest:
    """Decode exit user data.

    Raises:
        InvalidPayload: If the tag is unknown or the payload is malformed
    """
    tag = _decode_tag(data)
    if tag == ExitKind.PROPORTIONAL_OUT:
        _, amounts_out = _decode_body(["uint256", "uint256[]"], data)
        return ExitProportionalOut(amounts_out=tuple(amounts_out))

    logger.warning("exit_unknown_kind", tag=tag)
    raise InvalidPayload(f"Unknown exit kind: {tag}")
