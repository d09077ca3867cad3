class FetchError(Exception):
    """Base class for every failure to load one resource kind from the API."""

    def __init__(self, path: str, message: str):
        self.path = path
        self.message = message
        super().__init__(f"{path}: {message}")


class TransportError(FetchError):
    """The request never produced a response (connection, DNS, TLS, timeout)."""


class ResponseStatusError(FetchError):
    """The API answered with anything other than 200 OK."""

    def __init__(self, path: str, status: int, body: str = ""):
        self.status = status
        self.body = body
        message = f"unexpected status {status}"
        if body:
            message = f"{message}: {body}"
        super().__init__(path, message)


class DecodeError(FetchError):
    """The response payload was not JSON or did not have the expected shape."""


class FieldParseError(ValueError):
    """A single scalar field could not be parsed (e.g. a decimal sent as a string)."""

    def __init__(self, field_name: str, raw_value: object):
        self.field_name = field_name
        self.raw_value = raw_value
        super().__init__(f"Could not parse field '{field_name}' from {raw_value!r}")
