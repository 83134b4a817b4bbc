"""Client for Valve's Source RCON protocol."""

from .client import RCONClient, ThreadSafeRCON, new_challenge, new_client
from .env import client_from_env, load_env
from .errors import (
    FailedAuthorization,
    InvalidChallenge,
    InvalidRead,
    InvalidWrite,
    NotConnected,
    RCONError,
    UnauthorizedRequest,
)
from .packet import (
    PACKET_HEADER_SIZE,
    PACKET_PADDING_SIZE,
    SERVERDATA_AUTH,
    SERVERDATA_AUTH_RESPONSE,
    SERVERDATA_EXECCOMMAND,
    SERVERDATA_RESPONSE_VALUE,
    Header,
    Packet,
    decode,
    decode_header,
    encode,
    new_packet,
    read_exact,
)

__version__ = "0.1.0"
