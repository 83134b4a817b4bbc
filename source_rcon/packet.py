"""Source RCON packet framing: encode and decode, no connection handling.

Wire format, all integers signed 32-bit little-endian:

    [size][id][type][body bytes][0x00][0x00]

size counts everything after itself: id + type + body + the two NULs.
https://developer.valvesoftware.com/wiki/Source_RCON_Protocol
"""

import struct
from typing import NamedTuple

from .errors import InvalidRead

PACKET_HEADER_SIZE = 8  # id + type
PACKET_PADDING_SIZE = 2  # body terminator + empty string terminator

# Packet types. EXECCOMMAND and AUTH_RESPONSE share a value, direction tells them apart.
SERVERDATA_AUTH = 3
SERVERDATA_EXECCOMMAND = 2
SERVERDATA_AUTH_RESPONSE = 2
SERVERDATA_RESPONSE_VALUE = 0

_INT32 = struct.Struct("<i")
_PADDING = b"\x00" * PACKET_PADDING_SIZE


class Header(NamedTuple):
    size: int
    id: int
    type: int

    @property
    def body_length(self) -> int:
        """Bytes left on the wire after this header (body plus padding)."""
        return self.size - PACKET_HEADER_SIZE


class Packet(NamedTuple):
    header: Header
    body: str

    @property
    def id(self) -> int:
        return self.header.id

    @property
    def type(self) -> int:
        return self.header.type

    def __bytes__(self) -> bytes:
        return encode(self)


def new_packet(challenge: int, packet_type: int, body: str) -> Packet:
    """Build a packet with its size computed from the encoded body."""
    size = len(body.encode("utf-8")) + PACKET_HEADER_SIZE + PACKET_PADDING_SIZE
    return Packet(Header(size, challenge, packet_type), body)


def encode(packet: Packet) -> bytes:
    header = packet.header
    return (
        _INT32.pack(header.size)
        + _INT32.pack(header.id)
        + _INT32.pack(header.type)
        + packet.body.encode("utf-8")
        + _PADDING
    )


def read_exact(stream, n: int) -> bytes:
    """Read exactly n bytes from a socket (recv) or file-like object (read).

    Raises InvalidRead if the stream ends first. Socket errors propagate as-is.
    """
    read = stream.recv if hasattr(stream, "recv") else stream.read
    buf = bytearray()
    while len(buf) < n:
        chunk = read(n - len(buf))
        if not chunk:
            raise InvalidRead(f"Stream closed after {len(buf)} of {n} bytes.")
        buf.extend(chunk)
    return bytes(buf)


def decode_header(stream) -> Header:
    size = _INT32.unpack(read_exact(stream, 4))[0]
    challenge = _INT32.unpack(read_exact(stream, 4))[0]
    packet_type = _INT32.unpack(read_exact(stream, 4))[0]
    return Header(size, challenge, packet_type)


def read_body(stream, header: Header) -> str:
    """Read the body that follows header and strip its trailing NULs."""
    if header.body_length < 0:
        raise InvalidRead(f"Packet size {header.size} is smaller than its header.")
    body = read_exact(stream, header.body_length)
    return body.rstrip(b"\x00").decode("utf-8", errors="replace")


def decode(stream) -> Packet:
    """Decode one packet. Does not check the id or type against any request."""
    header = decode_header(stream)
    return Packet(header, read_body(stream, header))
