"""Shared HTTP session for the Mattermost REST API.

No retry adapter is mounted: a failed call is terminal for the request
that made it.
"""

import requests

from sharepost.config import get_settings

_session: requests.Session | None = None


def get_session() -> requests.Session:
    """Return a shared requests.Session authorized with the bot token."""
    global _session
    if _session is None:
        settings = get_settings()
        _session = requests.Session()
        _session.headers.update({
            "Authorization": f"Bearer {settings.mattermost_token}",
            "Accept": "application/json",
            "X-Requested-With": "XMLHttpRequest",
        })
    return _session
