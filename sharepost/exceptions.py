class HostAPIError(Exception):
    """Base class for failures talking to the Mattermost server."""


class AuthenticationError(HostAPIError):
    """Raised when the bot token is missing, invalid or lacks permission."""


class IntegrationError(HostAPIError):
    """Raised when a Mattermost API call fails."""


class NotFoundError(IntegrationError):
    """Raised when the requested team or post does not exist."""


class RateLimitError(HostAPIError):
    """Raised when the Mattermost rate limit is hit."""
