"""Source RCON client session: connection, authorization and command execution."""

import logging
import secrets
import socket
import threading

from .errors import FailedAuthorization, InvalidChallenge, InvalidWrite, NotConnected, UnauthorizedRequest
from .packet import (
    SERVERDATA_AUTH,
    SERVERDATA_AUTH_RESPONSE,
    SERVERDATA_EXECCOMMAND,
    SERVERDATA_RESPONSE_VALUE,
    Packet,
    decode_header,
    encode,
    new_packet,
    read_body,
)

log = logging.getLogger(__name__)

# Id Source servers put in an auth response when the password is wrong.
AUTH_FAILED_ID = -1


def new_challenge() -> int:
    """Random signed 32-bit id the server has to mirror back, never AUTH_FAILED_ID."""
    while True:
        challenge = int.from_bytes(secrets.token_bytes(4), "little", signed=True)
        if challenge != AUTH_FAILED_ID:
            return challenge


class RCONClient:
    """Source RCON protocol client bound to one TCP connection.

    Not thread-safe: one request is in flight at a time. Wrap it in
    ThreadSafeRCON or give each thread its own client.
    """

    def __init__(self, host: str, port: int, password: str | None = None, timeout: float | None = None):
        self.host = host
        self.port = port
        self.password = password
        self.timeout = timeout
        self.sock: socket.socket | None = None
        self._authorized = False

    def __repr__(self):
        state = "authorized" if self._authorized else "unauthorized"
        return f"<RCONClient {self.host}:{self.port} {state}>"

    def __enter__(self):
        if self.sock is None:
            self.connect()
        return self

    def __exit__(self, *exc):
        self.disconnect()

    @property
    def authorized(self) -> bool:
        return self._authorized

    @property
    def connected(self) -> bool:
        return self.sock is not None

    def connect(self):
        self.sock = socket.create_connection((self.host, self.port), self.timeout)
        log.debug("connected to %s:%s", self.host, self.port)

    def disconnect(self):
        sock, self.sock = self.sock, None
        if sock is not None:
            # shutdown wakes a recv blocked in another thread, close alone does not
            try:
                sock.shutdown(socket.SHUT_RDWR)
            except OSError:
                pass  # peer already gone
            sock.close()
            log.debug("disconnected from %s:%s", self.host, self.port)

    def authorize(self, password: str | None = None) -> Packet:
        """Authenticate with password, or the one given at construction.

        Returns the auth response. Raises FailedAuthorization if the server
        rejects it; the client then stays unauthorized.
        """
        if password is None:
            password = self.password or ""
        response = self.send(SERVERDATA_AUTH, password)
        if response.type != SERVERDATA_AUTH_RESPONSE:
            raise FailedAuthorization()
        self._authorized = True
        return response

    def execute(self, command: str) -> Packet:
        return self.send(SERVERDATA_EXECCOMMAND, command)

    def send(self, packet_type: int, body: str) -> Packet:
        """Send one request and read back its challenge-checked response."""
        if packet_type != SERVERDATA_AUTH and not self._authorized:
            raise UnauthorizedRequest()
        sock = self.sock
        if sock is None:
            raise NotConnected()

        request = new_packet(new_challenge(), packet_type, body)
        log.debug("sending type=%d id=%d size=%d", packet_type, request.id, request.header.size)
        payload = encode(request)
        if sock.send(payload) != len(payload):
            raise InvalidWrite()

        header = decode_header(sock)
        if packet_type == SERVERDATA_AUTH and header.type == SERVERDATA_RESPONSE_VALUE:
            # Source servers send an empty RESPONSE_VALUE ahead of the real auth response.
            read_body(sock, header)
            log.debug("discarded empty response value before auth response")
            header = decode_header(sock)

        if header.id != request.id:
            if packet_type == SERVERDATA_AUTH and header.id == AUTH_FAILED_ID:
                # Keep the stream in sync so the caller can retry on this connection.
                read_body(sock, header)
                raise FailedAuthorization()
            raise InvalidChallenge()

        return Packet(header, read_body(sock, header))


def new_client(host: str, port: int, password: str | None = None) -> RCONClient:
    """Create a client for host:port. Does not connect."""
    return RCONClient(host, port, password)


class ThreadSafeRCON:
    """Thread-safe wrapper around RCONClient. Duck-type compatible."""

    def __init__(self, rcon: RCONClient, lock=None):
        self._rcon = rcon
        self._lock = lock or threading.Lock()

    @property
    def authorized(self) -> bool:
        return self._rcon.authorized

    def authorize(self, password: str | None = None) -> Packet:
        with self._lock:
            return self._rcon.authorize(password)

    def execute(self, command: str) -> Packet:
        with self._lock:
            return self._rcon.execute(command)

    def disconnect(self):
        """Not locked, so it can abort a call blocked in another thread."""
        self._rcon.disconnect()
