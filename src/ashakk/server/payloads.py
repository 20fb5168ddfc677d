"""Inbound Socket.IO payloads.

Keys are accepted in snake_case or in the camelCase older clients send.
"""

from pydantic import AliasChoices, BaseModel, Field, field_validator

from ashakk.models import Tile


class RoomPayload(BaseModel):
    room_id: str = Field(min_length=1, validation_alias=AliasChoices("room_id", "roomId"))


class JoinPayload(RoomPayload):
    player_name: str = Field(min_length=1, validation_alias=AliasChoices("player_name", "playerName"))


class NumberPayload(RoomPayload):
    number_choice: int = Field(validation_alias=AliasChoices("number_choice", "numberChoice"))


class PlayPayload(RoomPayload):
    tiles: list[Tile]

    @field_validator("tiles", mode="before")
    @classmethod
    def _pairs_to_tiles(cls, value):
        """Allow [a, b] pairs alongside {"a": .., "b": ..} objects."""
        if not isinstance(value, list):
            return value
        return [
            {"a": item[0], "b": item[1]} if isinstance(item, (list, tuple)) and len(item) == 2 else item
            for item in value
        ]
