from typing import List
from pydantic import BaseModel, ConfigDict, Field


class KickRequest(BaseModel):
    """Request body for the fan-out kick endpoint."""

    user_id: int


class KickChannelResult(BaseModel):
    chat_id: int = Field(alias="chatId")
    title: str
    success: bool
    error: str | None = None

    model_config = ConfigDict(populate_by_name=True)


class KickSummary(BaseModel):
    total: int = 0
    success_count: int = Field(default=0, alias="successCount")
    fail_count: int = Field(default=0, alias="failCount")
    per_channel_results: List[KickChannelResult] = Field(
        default_factory=list, alias="perChannelResults"
    )

    model_config = ConfigDict(populate_by_name=True)
