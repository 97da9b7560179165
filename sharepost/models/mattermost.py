from typing import Any

from pydantic import BaseModel

# Fields the server assigns; a cloned post must not carry them over.
SERVER_ASSIGNED_FIELDS = {
    "id",
    "create_at",
    "update_at",
    "edit_at",
    "delete_at",
    "reply_count",
    "last_reply_at",
    "participants",
    "is_following",
    "metadata",
}


class Team(BaseModel):
    id: str
    name: str
    display_name: str = ""


class Post(BaseModel):
    id: str = ""
    create_at: int = 0
    update_at: int = 0
    delete_at: int = 0
    user_id: str = ""
    channel_id: str = ""
    root_id: str = ""
    message: str = ""
    type: str = ""
    props: dict[str, Any] = {}
    file_ids: list[str] = []

    model_config = {"extra": "allow"}

    def clone_to(self, channel_id: str, message: str) -> "Post":
        """Copy this post's content into a new, unsaved post in channel_id."""
        data = self.model_dump(exclude=SERVER_ASSIGNED_FIELDS)
        data.update(channel_id=channel_id, message=message)
        return Post.model_validate(data)

    def to_create_payload(self) -> dict:
        return self.model_dump(exclude=SERVER_ASSIGNED_FIELDS, exclude_defaults=True)


class PostList(BaseModel):
    order: list[str] = []
    posts: dict[str, Post] = {}
