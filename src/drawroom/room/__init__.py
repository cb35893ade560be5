"""Room Service client and draw room orchestration."""

from drawroom.room.client import Participant, RoomState, DrawResponse, RoomServiceClient
from drawroom.room.orchestrator import DrawRoom

__all__ = [
    "Participant",
    "RoomState",
    "DrawResponse",
    "RoomServiceClient",
    "DrawRoom",
]
