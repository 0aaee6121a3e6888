"""Subset of the Telegram Bot API update objects read by the relay.

Reference: https://core.telegram.org/bots/api#update
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    id: int
    is_bot: bool = False
    username: str | None = None
    first_name: str | None = None

    model_config = ConfigDict(extra="ignore")


class Chat(BaseModel):
    id: int
    type: str
    title: str | None = None
    username: str | None = None

    model_config = ConfigDict(extra="ignore")


class Message(BaseModel):
    message_id: int
    chat: Chat
    from_user: Optional[User] = Field(default=None, alias="from")
    media_group_id: str | None = None
    text: str | None = None

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ChatMember(BaseModel):
    status: str

    model_config = ConfigDict(extra="ignore")


class ChatMemberUpdated(BaseModel):
    chat: Chat
    new_chat_member: ChatMember

    model_config = ConfigDict(extra="ignore")


class CallbackQuery(BaseModel):
    id: str
    from_user: User = Field(alias="from")
    data: str | None = None
    message: Optional[Message] = None

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class Update(BaseModel):
    update_id: int
    message: Optional[Message] = None
    channel_post: Optional[Message] = None
    my_chat_member: Optional[ChatMemberUpdated] = None
    callback_query: Optional[CallbackQuery] = None

    model_config = ConfigDict(extra="ignore")
