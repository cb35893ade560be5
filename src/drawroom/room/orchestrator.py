"""Draw room orchestration.

Glues the Room Service to the wheel:

1. load_room() pulls participants and feeds them to the wheel
2. draw() asks the service for a winner and spins the wheel to it
3. the wheel's completion commits the winner and emits WINNER_COMMITTED,
   which is where celebrations hook in
4. participant changes and reset_draw() reset the wheel

Transport errors never escape: they become a user-facing ``error`` string.
"""

import asyncio
import logging
from typing import Any, Coroutine, Optional

from drawroom.core.errors import RoomConflictError, RoomServiceError, WheelError
from drawroom.core.events import Event, EventBus, EventType
from drawroom.room.client import Participant, RoomServiceClient, RoomState
from drawroom.wheel.controller import SpinController
from drawroom.wheel.models import DEFAULT_DURATION_MS, DEFAULT_SPIN_COUNT, SpinRequest

logger = logging.getLogger(__name__)


class DrawRoom:
    """Host-side logic for one draw room."""

    ADD_CONFLICT_MESSAGE = "The draw is already finished. Reset before adding a new participant."
    DELETE_CONFLICT_MESSAGE = "The draw is already finished. Start the next round before removing participants."

    def __init__(
        self,
        client: RoomServiceClient,
        wheel: SpinController,
        event_bus: Optional[EventBus] = None,
        spin_count: int = DEFAULT_SPIN_COUNT,
        duration_ms: int = DEFAULT_DURATION_MS,
    ):
        self.client = client
        self.wheel = wheel
        self.event_bus = event_bus
        self.spin_count = spin_count
        self.duration_ms = duration_ms

        self.room: Optional[RoomState] = None
        self.winner: Optional[Participant] = None
        self.loading_draw = False
        self.error: Optional[str] = None

        self.round_finished = asyncio.Event()
        self._background: set[asyncio.Task] = set()

        wheel.set_on_done(self.handle_wheel_done)

    # Derived UI state
    @property
    def participants(self) -> list[Participant]:
        return list(self.room.participants) if self.room else []

    @property
    def is_draw_done(self) -> bool:
        return bool(self.room and self.room.is_draw_done)

    @property
    def can_draw(self) -> bool:
        return bool(self.room and self.room.participants) and not self.loading_draw

    def primary_label(self) -> str:
        """Label for the main button."""
        if self.loading_draw:
            return "Spinning..."
        if self.is_draw_done:
            return "Next round"
        return "Spin"

    async def primary_action(self) -> bool:
        """Main button: draw, or start the next round once a draw is done."""
        if self.is_draw_done:
            return await self.reset_draw()
        return await self.draw()

    # Room Service operations
    async def load_room(self) -> Optional[RoomState]:
        """Refresh the room snapshot and the wheel items."""
        self.error = None
        try:
            room = await self.client.get_room()
        except RoomServiceError as e:
            self._fail(e.message or "Failed to load room")
            return None

        self.room = room
        self.wheel.set_items(room.wheel_items())
        # The service knows the winner before the wheel stops; hold it back until settle
        if not self.loading_draw:
            self.winner = room.winner
        logger.info(
            f"Room {room.room_id} loaded: {len(room.participants)} participants, "
            f"draw_done={room.is_draw_done}"
        )
        self._emit(EventType.ROOM_LOADED, {
            "room_id": room.room_id,
            "participants": len(room.participants),
            "is_draw_done": room.is_draw_done,
            "winner_id": self.winner.id if self.winner else None,
        })
        return room

    async def add_participant(self, name: str) -> bool:
        name = name.strip()
        if not name:
            return False

        try:
            room = await self.client.add_participant(name)
        except RoomConflictError:
            self._fail(self.ADD_CONFLICT_MESSAGE)
            return False
        except RoomServiceError as e:
            self._fail(e.message or "Failed to add participant")
            return False

        self.room = room
        self.wheel.set_items(room.wheel_items())
        self._reset_wheel()
        self._emit(EventType.PARTICIPANTS_CHANGED, {"added": name})
        return True

    async def delete_participant(self, participant_id: str) -> bool:
        if not self.room:
            return False

        try:
            await self.client.delete_participant(participant_id)
        except RoomConflictError:
            self._fail(self.DELETE_CONFLICT_MESSAGE)
            return False
        except RoomServiceError as e:
            self._fail(e.message or "Failed to delete participant")
            return False

        if self.winner and self.winner.id == participant_id:
            self.winner = None
        self._reset_wheel()
        self._emit(EventType.PARTICIPANTS_CHANGED, {"removed": participant_id})
        await self.load_room()
        return True

    async def draw(self) -> bool:
        """Get a winner from the Room Service and spin the wheel to it.

        Returns:
            True if the wheel started spinning
        """
        if not self.room or not self.room.participants:
            return False
        if self.loading_draw:
            logger.debug("Draw ignored: a draw is already in progress")
            return False

        self.loading_draw = True
        self.error = None
        self.winner = None
        self.round_finished.clear()

        try:
            response = await self.client.draw()
        except RoomServiceError as e:
            self._fail(e.message or "Failed to draw")
            self.loading_draw = False
            return False

        request = SpinRequest(
            target_item_id=response.winner.id,
            spin_count=self.spin_count,
            duration_ms=self.duration_ms,
        )
        try:
            started = self.wheel.spin_to(request)
        except WheelError as e:
            self._fail(str(e))
            self.loading_draw = False
            return False

        if not started:
            self.loading_draw = False
        return started

    async def reset_draw(self) -> bool:
        """Start the next round."""
        try:
            await self.client.reset_draw()
        except RoomServiceError as e:
            self._fail(e.message or "Failed to reset draw")
            return False

        self.winner = None
        self._reset_wheel()
        await self.load_room()
        return True

    def handle_wheel_done(self, winner_id: str) -> None:
        """Wheel completion: commit the winner and refresh the room."""
        if self.room:
            # Mirror the service until the reload lands
            self.room.is_draw_done = True
            self.room.winner_id = winner_id
            self.winner = self.room.find(winner_id)
        else:
            self.winner = None
        self.loading_draw = False
        self.round_finished.set()

        logger.info(f"Winner committed: {winner_id}")
        self._emit(EventType.WINNER_COMMITTED, {
            "winner_id": winner_id,
            "winner_name": self.winner.name if self.winner else None,
        })
        self._spawn(self.load_room())

    async def wait_for_winner(self, timeout: Optional[float] = None) -> Optional[Participant]:
        """Wait until the current spin settles."""
        await asyncio.wait_for(self.round_finished.wait(), timeout)
        return self.winner

    async def close(self) -> None:
        for task in list(self._background):
            task.cancel()
        if self._background:
            await asyncio.gather(*self._background, return_exceptions=True)
        await self.client.close()

    # Internals
    def _reset_wheel(self) -> None:
        self.wheel.reset()
        # A reset drops any pending completion, so the draw can never finish
        self.loading_draw = False

    def _spawn(self, coro: Coroutine[Any, Any, Any]) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    def _fail(self, message: str) -> None:
        self.error = message
        logger.warning(f"Draw room error: {message}")
        self._emit(EventType.ROOM_ERROR, {"message": message})

    def _emit(self, event_type: EventType, data: dict) -> None:
        if self.event_bus:
            self.event_bus.emit(Event(event_type, data=data, source="room"))
