class VisionHubError(Exception):
    """Base class for errors raised by the vision hub."""


class InvalidBufferSize(VisionHubError, ValueError):
    """Raw buffer length does not match the declared image geometry."""

    def __init__(self, expected, actual, what="buffer"):
        super().__init__(f"{what}: expected {expected} bytes, got {actual}")
        self.expected = expected
        self.actual = actual


class FrameTimeout(VisionHubError, TimeoutError):
    """No synchronized sample arrived within the fetch timeout."""


class DeviceError(VisionHubError, RuntimeError):
    """Unrecoverable camera condition (disconnect, end of recording, ...)."""


class ReleaseErrors(VisionHubError):
    """One or more resources failed to release."""

    def __init__(self, errors):
        self.errors = list(errors)
        details = "; ".join(str(e) for e in self.errors)
        super().__init__(f"{len(self.errors)} release error(s): {details}")
