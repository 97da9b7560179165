"""Share and move a post to another channel from a submitted dialog.

Host API failures are logged here with their cause; the submitting user
only ever sees one of the fixed messages below.
"""

import logging
from enum import Enum

from sharepost.config import get_settings
from sharepost.exceptions import HostAPIError
from sharepost.models.dialog import DialogOutcome, SubmitDialogRequest, SubmitDialogResponse
from sharepost.models.mattermost import Post
from sharepost.services import mattermost

logger = logging.getLogger(__name__)

TO_CHANNEL_KEY = "to_channel"
SHARE_TYPE_KEY = "share_type"
ADDITIONAL_TEXT_KEY = "additional_text"

GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again later."
THREAD_NOT_MOVABLE_MESSAGE = "The post that has parent or child posts cannot be moved to other channel."
SAME_CHANNEL_MESSAGE = "Cannot move the post to same channel."

# A root post and its replies; more than this many posts means a real thread.
MAX_MOVABLE_THREAD_SIZE = 2


class ShareType(str, Enum):
    SHARE = "share"
    MOVE = "move"


def make_post_link(team_name: str, post_id: str) -> str:
    return f"{get_settings().permalink_base}/{team_name}/pl/{post_id}"


def notify_user(channel_id: str, user_id: str, message: str) -> None:
    """Send an ephemeral message; delivery failures are logged, not raised."""
    try:
        mattermost.send_ephemeral_post(channel_id, user_id, message)
    except HostAPIError as e:
        logger.warning(
            "Failed to send ephemeral post channel_id=%s user_id=%s: %s",
            channel_id, user_id, e,
        )


def _generic_error() -> DialogOutcome:
    return DialogOutcome(message=GENERIC_ERROR_MESSAGE)


def _invalid_field(field: str, detail: str) -> DialogOutcome:
    return DialogOutcome(
        message=GENERIC_ERROR_MESSAGE,
        response=SubmitDialogResponse(errors={field: detail}),
    )


def _to_channel(dialog: SubmitDialogRequest) -> str | None:
    value = dialog.submission.get(TO_CHANNEL_KEY)
    if not isinstance(value, str) or not value:
        logger.warning("Failed to get %s key. Value is: %r", TO_CHANNEL_KEY, value)
        return None
    return value


def _additional_text(dialog: SubmitDialogRequest) -> str:
    value = dialog.submission.get(ADDITIONAL_TEXT_KEY)
    if isinstance(value, str) and value:
        return f"{value}\n\n"
    return ""


def handle_share_dialog(dialog: SubmitDialogRequest) -> DialogOutcome:
    """Validate a share dialog submission and dispatch on its share type."""
    to_channel = _to_channel(dialog)
    if to_channel is None:
        return _invalid_field(TO_CHANNEL_KEY, "Select a channel.")

    share_type = dialog.submission.get(SHARE_TYPE_KEY)
    if not isinstance(share_type, str):
        logger.warning("Failed to get %s key. Value is: %r", SHARE_TYPE_KEY, share_type)
        return _invalid_field(SHARE_TYPE_KEY, "Select a share type.")

    additional_text = _additional_text(dialog)
    if share_type == ShareType.SHARE.value:
        return share_post(dialog, to_channel, additional_text)
    if share_type == ShareType.MOVE.value:
        return move_post(dialog, to_channel, additional_text)

    logger.warning("Invalid share_type %r", share_type)
    return _invalid_field(SHARE_TYPE_KEY, f"Unknown share type {share_type!r}.")


def handle_move_dialog(dialog: SubmitDialogRequest) -> DialogOutcome:
    """Move dialog submission; share_type is implied."""
    to_channel = _to_channel(dialog)
    if to_channel is None:
        return _invalid_field(TO_CHANNEL_KEY, "Select a channel.")
    return move_post(dialog, to_channel, _additional_text(dialog))


def share_post(dialog: SubmitDialogRequest, to_channel: str, additional_text: str) -> DialogOutcome:
    post_id = dialog.callback_id
    try:
        team = mattermost.get_team(dialog.team_id)
    except HostAPIError as e:
        logger.error("Failed to get team team_id=%s: %s", dialog.team_id, e)
        return _generic_error()

    link = make_post_link(team.name, post_id)
    try:
        mattermost.create_post(Post(
            # REST v4 replaces user_id with the session user.
            user_id=dialog.user_id,
            channel_id=to_channel,
            message=f"{additional_text}> Shared from {link}",
        ))
    except HostAPIError as e:
        logger.warning("Failed to create shared post in channel_id=%s: %s", to_channel, e)
        return _generic_error()

    logger.info("Shared post post_id=%s to channel_id=%s", post_id, to_channel)
    return DialogOutcome()


def move_post(dialog: SubmitDialogRequest, to_channel: str, additional_text: str) -> DialogOutcome:
    """Recreate the post in to_channel, then delete the original.

    The two steps are not atomic. If the delete fails the new post is kept
    and the user is told something went wrong.
    """
    post_id = dialog.callback_id
    try:
        thread = mattermost.get_post_thread(post_id)
    except HostAPIError as e:
        logger.error("Failed to get post thread post_id=%s: %s", post_id, e)
        return _generic_error()

    if len(thread.posts) > MAX_MOVABLE_THREAD_SIZE:
        logger.warning("Post with parent or child posts cannot be moved post_id=%s", post_id)
        return DialogOutcome(message=THREAD_NOT_MOVABLE_MESSAGE)

    try:
        old_post = mattermost.get_post(post_id)
    except HostAPIError as e:
        logger.error("Failed to get post post_id=%s: %s", post_id, e)
        return _generic_error()

    if old_post.channel_id == to_channel:
        logger.warning("Cannot move post post_id=%s to the channel it is in", post_id)
        return DialogOutcome(message=SAME_CHANNEL_MESSAGE)

    try:
        team = mattermost.get_team(dialog.team_id)
    except HostAPIError as e:
        logger.error("Failed to get team team_id=%s: %s", dialog.team_id, e)
        return _generic_error()

    new_post = old_post.clone_to(to_channel, f"{additional_text}{old_post.message}")
    try:
        moved_post = mattermost.create_post(new_post)
    except HostAPIError as e:
        logger.warning("Failed to create moved copy of post_id=%s in channel_id=%s: %s", post_id, to_channel, e)
        return _generic_error()

    try:
        mattermost.delete_post(old_post.id)
    except HostAPIError as e:
        logger.error(
            "Failed to delete original post post_id=%s after creating new_post_id=%s: %s",
            old_post.id, moved_post.id, e,
        )
        return _generic_error()

    logger.info("Moved post post_id=%s to channel_id=%s as post_id=%s", post_id, to_channel, moved_post.id)
    notify_user(
        old_post.channel_id,
        dialog.user_id,
        f"This post is moved to {make_post_link(team.name, moved_post.id)}",
    )
    return DialogOutcome()
