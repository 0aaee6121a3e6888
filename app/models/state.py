"""Persisted relay state.

The whole registry plus the global mute flag is stored as one JSON blob:

    {"globalMuted": false, "channels": {"-100123": {"title": "News", ...}}}
"""

from typing import Dict
from pydantic import BaseModel, ConfigDict, Field


class ChannelRecord(BaseModel):
    title: str
    muted: bool = False
    last_group_id: str | None = Field(default=None, alias="lastGroupId")
    last_group_timestamp: int = Field(default=0, alias="lastGroupTimestamp")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class RelayState(BaseModel):
    global_muted: bool = Field(default=False, alias="globalMuted")
    channels: Dict[int, ChannelRecord] = Field(default_factory=dict)

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)
