from typing import TypeVar

import requests
from pydantic import BaseModel, ValidationError

from sharepost.config import get_settings
from sharepost.exceptions import (
    AuthenticationError,
    IntegrationError,
    NotFoundError,
    RateLimitError,
)
from sharepost.http_client import get_session
from sharepost.models.mattermost import Post, PostList, Team

ModelT = TypeVar("ModelT", bound=BaseModel)


def _api_url(path: str) -> str:
    return f"{get_settings().mattermost_url.rstrip('/')}/api/v4{path}"


def _error_detail(resp: requests.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        return resp.text[:500]
    if isinstance(data, dict):
        return data.get("message") or data.get("id") or str(data)
    return str(data)


def _handle_response(resp: requests.Response) -> dict:
    """Check the HTTP status of a Mattermost API response and decode its body."""
    if resp.status_code == 429:
        raise RateLimitError("Mattermost API rate limit exceeded.")
    if resp.status_code in (401, 403):
        raise AuthenticationError(f"Mattermost rejected the bot token: {_error_detail(resp)}")
    if resp.status_code == 404:
        raise NotFoundError(f"Mattermost resource not found: {_error_detail(resp)}")
    if resp.status_code >= 400:
        raise IntegrationError(
            f"Mattermost API error (HTTP {resp.status_code}): {_error_detail(resp)}"
        )
    if not resp.content:
        return {}
    try:
        return resp.json()
    except ValueError as e:
        raise IntegrationError(f"Mattermost API returned a non-JSON body: {resp.text[:200]}") from e


def _parse(model: type[ModelT], data) -> ModelT:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise IntegrationError(f"Unexpected Mattermost {model.__name__} payload: {e}") from e


def _request(method: str, path: str, **kwargs) -> dict:
    try:
        resp = get_session().request(
            method,
            _api_url(path),
            timeout=get_settings().request_timeout,
            **kwargs,
        )
    except requests.RequestException as e:
        raise IntegrationError(f"Mattermost API request failed: {e}") from e
    return _handle_response(resp)


def get_team(team_id: str) -> Team:
    return _parse(Team, _request("GET", f"/teams/{team_id}"))


def get_post(post_id: str) -> Post:
    return _parse(Post, _request("GET", f"/posts/{post_id}"))


def get_post_thread(post_id: str) -> PostList:
    """Get the root post and every reply of the thread post_id belongs to."""
    return _parse(PostList, _request("GET", f"/posts/{post_id}/thread"))


def create_post(post: Post) -> Post:
    return _parse(Post, _request("POST", "/posts", json=post.to_create_payload()))


def delete_post(post_id: str) -> None:
    _request("DELETE", f"/posts/{post_id}")


def send_ephemeral_post(channel_id: str, user_id: str, message: str) -> Post:
    """Post a message in channel_id that only user_id can see."""
    data = _request(
        "POST",
        "/posts/ephemeral",
        json={
            "user_id": user_id,
            "post": {"channel_id": channel_id, "message": message},
        },
    )
    return _parse(Post, data)
