"""Errors raised by the RCON client."""


class RCONError(Exception):
    """Base class for every RCON protocol failure."""


class InvalidWrite(RCONError, ConnectionError):
    def __init__(self, msg: str = "Failed to write the payload correctly to remote connection."):
        super().__init__(msg)


class InvalidRead(RCONError, ConnectionError):
    def __init__(self, msg: str = "Failed to read the response correctly from remote connection."):
        super().__init__(msg)


class InvalidChallenge(RCONError):
    def __init__(self, msg: str = "Server failed to mirror request challenge."):
        super().__init__(msg)


class UnauthorizedRequest(RCONError):
    def __init__(self, msg: str = "Client not authorized to remote server."):
        super().__init__(msg)


class FailedAuthorization(RCONError):
    def __init__(self, msg: str = "Failed to authorize to the remote server."):
        super().__init__(msg)


class NotConnected(RCONError, ConnectionError):
    def __init__(self, msg: str = "Client is not connected, call connect() first."):
        super().__init__(msg)
