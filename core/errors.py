"""Error taxonomy for detection, synthesis and writing."""


class AutodockerError(Exception):
    """Base class for every error raised by autodocker."""


class ProbeError(AutodockerError):
    """A manifest could not be read or parsed. Never leaves the detector."""


class NotFound(ProbeError):
    """The requested file does not exist."""


class UnsupportedStack(AutodockerError):
    """Neither a frontend nor a backend was detected."""

    def __init__(self, message="No supported project type detected"):
        super().__init__(message)


class UnsupportedBackend(AutodockerError):
    """The profile names a backend kind with no Dockerfile template."""

    def __init__(self, kind):
        self.kind = kind
        super().__init__(f"Unsupported backend type: {kind}")


class UnsupportedDatabase(AutodockerError):
    """The profile names a database kind with no compose service definition."""

    def __init__(self, kind):
        self.kind = kind
        super().__init__(f"Unsupported database type: {kind}")


class WriteError(AutodockerError):
    """An artifact could not be written to disk."""

    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to write {path}: {reason}")
