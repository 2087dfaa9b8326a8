"""
Exceptions raised by the lanes library.
"""


class LanesError(Exception):
    """Base class for all lanes errors."""


class ConfigError(LanesError):
    """The global lanes configuration could not be read or written."""


class ProfileLoadError(LanesError):
    """A profile file could not be read or parsed."""


class InvalidProfileError(LanesError):
    """A profile was parsed but is missing required information."""


class MissingAccessKeyError(InvalidProfileError):
    def __init__(self):
        super().__init__("missing AWS access key ID")


class MissingSecretKeyError(InvalidProfileError):
    def __init__(self):
        super().__init__("missing AWS secret access key")


class ProfileExistsError(LanesError):
    def __init__(self, name: str):
        super().__init__(f"profile {name!r} already exists")
        self.name = name


class ProfileNotFoundError(LanesError):
    """The requested profile does not exist."""


class MissingSSHProfileError(LanesError):
    """A server has no SSH settings for its lane."""


class NoAddressError(LanesError):
    """A server has no IP address to connect to."""


class ServerNotFoundError(LanesError):
    """No server matched the requested name, ID or index."""


class UnsupportedShellError(LanesError):
    def __init__(self, shell: str):
        super().__init__(f"Unsupported shell: {shell}")
        self.shell = shell
