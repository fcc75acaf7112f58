"""Pure Cosmos SDK wire helpers: protobuf decoding, tx hashing. No I/O."""
from __future__ import annotations

import base64
import hashlib
from collections.abc import Iterator
from dataclasses import dataclass

WIRE_VARINT = 0
WIRE_FIXED64 = 1
WIRE_LENGTH_DELIMITED = 2
WIRE_FIXED32 = 5

MSG_SEND_TYPE_URL = "/cosmos.bank.v1beta1.MsgSend"


@dataclass(frozen=True)
class AnyMessage:
    """A ``google.protobuf.Any`` taken from ``TxBody.messages``."""

    type_url: str
    value: bytes


@dataclass(frozen=True)
class Coin:
    denom: str
    amount: str


@dataclass(frozen=True)
class MsgSend:
    from_address: str
    to_address: str
    amount: tuple[Coin, ...]


# ---------------------------------------------------------------------------
# Wire format
# ---------------------------------------------------------------------------


def read_varint(buf: bytes, pos: int) -> tuple[int, int]:
    """Decode a base-128 varint at ``pos``. Returns (value, next position)."""
    result = 0
    shift = 0
    while True:
        if pos >= len(buf):
            raise ValueError("Truncated varint")
        byte = buf[pos]
        pos += 1
        result |= (byte & 0x7F) << shift
        if not byte & 0x80:
            return result, pos
        shift += 7
        if shift > 63:
            raise ValueError("Varint too long")


def encode_varint(value: int) -> bytes:
    out = bytearray()
    while True:
        bits = value & 0x7F
        value >>= 7
        if value:
            out.append(bits | 0x80)
        else:
            out.append(bits)
            return bytes(out)


def encode_length_delimited(field_number: int, data: bytes) -> bytes:
    """Encode one length-delimited field (strings, bytes, sub-messages)."""
    tag = encode_varint((field_number << 3) | WIRE_LENGTH_DELIMITED)
    return tag + encode_varint(len(data)) + data


def iter_fields(buf: bytes) -> Iterator[tuple[int, int, int | bytes]]:
    """Yield (field number, wire type, value) for every field in a message.

    Varints are yielded as ints, everything else as raw bytes.
    """
    pos = 0
    while pos < len(buf):
        key, pos = read_varint(buf, pos)
        field_number, wire_type = key >> 3, key & 0x07

        if wire_type == WIRE_VARINT:
            value, pos = read_varint(buf, pos)
            yield field_number, wire_type, value
        elif wire_type == WIRE_LENGTH_DELIMITED:
            length, pos = read_varint(buf, pos)
            if pos + length > len(buf):
                raise ValueError(f"Truncated field {field_number}")
            yield field_number, wire_type, buf[pos:pos + length]
            pos += length
        elif wire_type in (WIRE_FIXED64, WIRE_FIXED32):
            size = 8 if wire_type == WIRE_FIXED64 else 4
            if pos + size > len(buf):
                raise ValueError(f"Truncated field {field_number}")
            yield field_number, wire_type, buf[pos:pos + size]
            pos += size
        else:
            raise ValueError(f"Unsupported wire type {wire_type}")


def _length_delimited(buf: bytes, field_number: int) -> list[bytes]:
    return [
        value
        for number, wire_type, value in iter_fields(buf)
        if number == field_number and wire_type == WIRE_LENGTH_DELIMITED
    ]


def _first_string(buf: bytes, field_number: int) -> str:
    values = _length_delimited(buf, field_number)
    return values[0].decode("utf-8") if values else ""


# ---------------------------------------------------------------------------
# Cosmos SDK messages
# ---------------------------------------------------------------------------


def tx_hash(tx_b64: str) -> str:
    """Tendermint tx hash: upper-case hex SHA-256 of the raw tx bytes."""
    raw = base64.b64decode(tx_b64, validate=True)
    return hashlib.sha256(raw).hexdigest().upper()


def decode_messages(tx_b64: str) -> list[AnyMessage]:
    """Decode the messages embedded in a base64 ``TxRaw``.

    TxRaw.body_bytes (1) -> TxBody.messages (1, repeated Any{type_url=1, value=2}).
    """
    raw = base64.b64decode(tx_b64, validate=True)
    bodies = _length_delimited(raw, 1)
    if not bodies:
        return []

    messages: list[AnyMessage] = []
    for any_bytes in _length_delimited(bodies[0], 1):
        values = _length_delimited(any_bytes, 2)
        messages.append(
            AnyMessage(
                type_url=_first_string(any_bytes, 1),
                value=values[0] if values else b"",
            )
        )
    return messages


def decode_coin(buf: bytes) -> Coin:
    return Coin(denom=_first_string(buf, 1), amount=_first_string(buf, 2))


def decode_msg_send(value: bytes) -> MsgSend:
    """Decode ``cosmos.bank.v1beta1.MsgSend``."""
    return MsgSend(
        from_address=_first_string(value, 1),
        to_address=_first_string(value, 2),
        amount=tuple(decode_coin(c) for c in _length_delimited(value, 3)),
    )


def balance_query_data(address: str, denom: str) -> str:
    """Hex-encoded ``QueryBalanceRequest{address, denom}`` for abci_query."""
    payload = encode_length_delimited(1, address.encode("utf-8")) + encode_length_delimited(
        2, denom.encode("utf-8")
    )
    return payload.hex()


def parse_balance(value_b64: str | None) -> str:
    """Amount from a base64 ``QueryBalanceResponse``; "0" when there is none."""
    if not value_b64:
        return "0"
    raw = base64.b64decode(value_b64, validate=True)
    balances = _length_delimited(raw, 1)
    if not balances:
        return "0"
    return decode_coin(balances[0]).amount or "0"


def format_coins(coins: tuple[Coin, ...]) -> str:
    return ", ".join(f"{c.amount}{c.denom}" for c in coins)
