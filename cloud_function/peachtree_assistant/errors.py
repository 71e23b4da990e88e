class ClientInputError(ValueError):
    """Request is missing a required field or names an unknown type (HTTP 400)."""


class ConfigurationError(RuntimeError):
    """A required environment variable is not set."""


class UpstreamError(RuntimeError):
    """An external API answered without usable content."""
