from typing import Any

from pydantic import BaseModel, field_validator


class SubmitDialogRequest(BaseModel):
    type: str = ""
    url: str = ""
    callback_id: str = ""
    state: str = ""
    user_id: str = ""
    channel_id: str = ""
    team_id: str = ""
    submission: dict[str, Any] = {}
    cancelled: bool = False

    model_config = {"frozen": True}

    @field_validator("submission", mode="before")
    @classmethod
    def null_submission_is_empty(cls, value: Any) -> Any:
        return {} if value is None else value


class SubmitDialogResponse(BaseModel):
    error: str | None = None
    errors: dict[str, str] | None = None


class DialogOutcome(BaseModel):
    """What a dialog handler wants shown to the submitting user.

    message is delivered as an ephemeral post in the dialog's channel;
    response, when set, is returned to the dialog itself.
    """

    message: str | None = None
    response: SubmitDialogResponse | None = None
