import io

import pytest

from source_rcon import RCONClient, encode, new_packet

CHALLENGE = 0x1234ABCD


class FakeSocket:
    """In-memory stand-in for a connected socket."""

    def __init__(self, incoming: bytes = b"", send_limit: int | None = None):
        self.incoming = io.BytesIO(incoming)
        self.sent = b""
        self.send_limit = send_limit
        self.close_calls = 0

    def send(self, data) -> int:
        data = bytes(data)
        if self.send_limit is not None:
            data = data[:self.send_limit]
        self.sent += data
        return len(data)

    def recv(self, n: int) -> bytes:
        return self.incoming.read(n)

    def shutdown(self, how):
        pass

    def close(self):
        self.close_calls += 1


def reply(challenge: int, packet_type: int, body: str = "") -> bytes:
    return encode(new_packet(challenge, packet_type, body))


@pytest.fixture
def fixed_challenge(monkeypatch):
    monkeypatch.setattr("source_rcon.client.new_challenge", lambda: CHALLENGE)
    return CHALLENGE


@pytest.fixture
def make_client(fixed_challenge):
    def _make(incoming: bytes = b"", **kw) -> RCONClient:
        client = RCONClient("localhost", 27015, "rconpassword")
        client.sock = FakeSocket(incoming, **kw)
        return client
    return _make
