import pytest
from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from sharepost.config import Settings


# --- Canned Mattermost API responses ---

SITE_URL = "https://chat.example.com"

TEAM_API = {"id": "team1", "name": "engineering", "display_name": "Engineering"}

POST_API = {
    "id": "post1",
    "create_at": 1700000000000,
    "update_at": 1700000000000,
    "edit_at": 0,
    "delete_at": 0,
    "user_id": "author1",
    "channel_id": "town-square",
    "root_id": "",
    "message": "Deploy is done",
    "type": "",
    "props": {"from_bot": "false"},
    "hashtags": "",
    "file_ids": ["file1"],
    "reply_count": 0,
    "metadata": {},
}

MOVED_POST_API = {**POST_API, "id": "post2", "channel_id": "ops", "message": "FYI\n\nDeploy is done"}

THREAD_API = {"order": ["post1"], "posts": {"post1": POST_API}}

DIALOG_SUBMISSION = {
    "type": "dialog_submission",
    "callback_id": "post1",
    "state": "",
    "user_id": "user1",
    "channel_id": "town-square",
    "team_id": "team1",
    "submission": {"to_channel": "ops", "share_type": "share"},
    "cancelled": False,
}


def make_response(status_code=200, json_data=None, text=""):
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = json_data
    resp.content = b"" if json_data is None and not text else b"x"
    resp.text = text
    return resp


@pytest.fixture
def settings():
    return Settings(
        mattermost_url="http://mattermost.test:8065",
        mattermost_token="bot-token",
        site_url=SITE_URL,
    )


@pytest.fixture
def mock_settings(mocker, settings):
    mocker.patch("sharepost.services.share.get_settings", return_value=settings)
    mocker.patch("sharepost.services.mattermost.get_settings", return_value=settings)
    return settings


@pytest.fixture
def mock_session(mocker, mock_settings):
    """Mocked requests.Session used by the Mattermost service."""
    session = MagicMock()
    mocker.patch("sharepost.services.mattermost.get_session", return_value=session)
    return session


@pytest.fixture
def api_client():
    """FastAPI TestClient for router tests."""
    from sharepost.main import api
    return TestClient(api)
