"""Room Service client.

The Room Service owns the participant list and picks the winner. This
client wraps its HTTP API:

    GET    /rooms/{room_id}                      room snapshot
    POST   /rooms/{room_id}/participants         add participant {name}
    DELETE /rooms/{room_id}/participants/{pid}   remove participant
    POST   /rooms/{room_id}/draw                 pick a winner
    POST   /rooms/{room_id}/reset_draw           start the next round

Mutations answer 409 while a draw is finalized.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, TypeVar

import aiohttp

from drawroom.core.errors import RoomConflictError, RoomServiceError
from drawroom.wheel.models import WheelItem

logger = logging.getLogger(__name__)

T = TypeVar("T")

MALFORMED_RESPONSE = "Malformed Room Service response"


@dataclass(frozen=True)
class Participant:
    """A person on the wheel."""
    id: str
    name: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Participant":
        return cls(id=str(data["id"]), name=str(data["name"]))

    def to_item(self) -> WheelItem:
        return WheelItem(id=self.id, label=self.name)


@dataclass
class RoomState:
    """Room snapshot as returned by GET /rooms/{room_id}."""
    room_id: str
    participants: list[Participant] = field(default_factory=list)
    is_draw_done: bool = False
    winner_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RoomState":
        winner_id = data.get("winner_id")
        return cls(
            room_id=str(data["room_id"]),
            participants=[Participant.from_dict(p) for p in data.get("participants") or []],
            is_draw_done=bool(data.get("is_draw_done", False)),
            winner_id=str(winner_id) if winner_id is not None else None,
        )

    def find(self, participant_id: str) -> Optional[Participant]:
        for participant in self.participants:
            if participant.id == participant_id:
                return participant
        return None

    @property
    def winner(self) -> Optional[Participant]:
        """Winner participant, only once the draw is done."""
        if not self.is_draw_done or self.winner_id is None:
            return None
        return self.find(self.winner_id)

    def wheel_items(self) -> list[WheelItem]:
        return [p.to_item() for p in self.participants]


@dataclass(frozen=True)
class DrawResponse:
    """Result of POST /rooms/{room_id}/draw."""
    room_id: str
    winner: Participant

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DrawResponse":
        return cls(room_id=str(data["room_id"]), winner=Participant.from_dict(data["winner"]))


class RoomServiceClient:
    """Async client for one room on the Room Service."""

    DEFAULT_API_BASE = "http://127.0.0.1:8000"
    DEFAULT_ROOM_ID = "r1"

    def __init__(
        self,
        api_base: Optional[str] = None,
        room_id: Optional[str] = None,
        timeout: float = 30.0,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """Initialize the client.

        Args:
            api_base: Base URL of the Room Service
            room_id: Room to operate on
            timeout: Total request timeout in seconds
            session: Externally managed session; not closed by close()
        """
        self._api_base = (api_base or self.DEFAULT_API_BASE).rstrip("/")
        self._room_id = room_id or self.DEFAULT_ROOM_ID
        self._timeout = timeout
        self._session = session
        self._owns_session = session is None

    @property
    def room_id(self) -> str:
        return self._room_id

    async def __aenter__(self) -> "RoomServiceClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._timeout),
                headers={"Content-Type": "application/json"},
            )
            self._owns_session = True
        return self._session

    def _room_path(self, suffix: str = "") -> str:
        return f"/rooms/{self._room_id}{suffix}"

    async def get_room(self) -> RoomState:
        path = self._room_path()
        data = await self._request("GET", path)
        return self._parse(RoomState.from_dict, data, path)

    async def add_participant(self, name: str) -> RoomState:
        path = self._room_path("/participants")
        data = await self._request("POST", path, payload={"name": name})
        return self._parse(RoomState.from_dict, data, path)

    async def delete_participant(self, participant_id: str) -> None:
        await self._request("DELETE", self._room_path(f"/participants/{participant_id}"))

    async def draw(self) -> DrawResponse:
        """Ask the Room Service to pick the winner."""
        path = self._room_path("/draw")
        data = await self._request("POST", path)
        response = self._parse(DrawResponse.from_dict, data, path)
        logger.info(f"Room {self._room_id} drew winner {response.winner.id} ({response.winner.name})")
        return response

    async def reset_draw(self) -> None:
        await self._request("POST", self._room_path("/reset_draw"))

    async def _request(
        self,
        method: str,
        path: str,
        payload: Optional[dict[str, Any]] = None,
    ) -> Any:
        """Send a request and decode the JSON body.

        Raises:
            RoomConflictError: HTTP 409
            RoomServiceError: Any other HTTP error, timeout, network failure
                or invalid JSON body
        """
        url = f"{self._api_base}{path}"
        try:
            session = await self._get_session()
            async with session.request(method, url, json=payload) as response:
                if response.status == 409:
                    detail = await self._read_detail(response)
                    logger.warning(f"{method} {path} conflict: {detail}")
                    raise RoomConflictError(detail or "Draw already finalized")

                if response.status >= 400:
                    detail = await self._read_detail(response)
                    logger.error(f"{method} {path} failed: HTTP {response.status} {detail}")
                    raise RoomServiceError(
                        f"HTTP {response.status}: {detail}" if detail else f"HTTP {response.status}",
                        status=response.status,
                    )

                if response.content_type == "application/json":
                    try:
                        return await response.json()
                    except ValueError as e:
                        logger.error(f"Invalid JSON from {method} {path}: {e}")
                        raise RoomServiceError(MALFORMED_RESPONSE) from e
                return None

        except asyncio.TimeoutError:
            logger.error(f"Timeout on {method} {path}")
            raise RoomServiceError("Request timed out") from None
        except aiohttp.ClientError as e:
            logger.error(f"Network error on {method} {path}: {e}")
            raise RoomServiceError(f"Network error: {e}") from e

    @staticmethod
    def _parse(parser: Callable[[Any], T], data: Any, path: str) -> T:
        """Build a model from a response body.

        Raises:
            RoomServiceError: Body is missing fields or has the wrong shape
        """
        try:
            return parser(data)
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Malformed response from {path}: {e!r}")
            raise RoomServiceError(MALFORMED_RESPONSE) from e

    @staticmethod
    async def _read_detail(response: aiohttp.ClientResponse) -> str:
        """Extract an error message from a failed response."""
        try:
            if response.content_type == "application/json":
                data = await response.json()
                if isinstance(data, dict):
                    return str(data.get("detail") or data.get("error") or data)
                return str(data)
            return (await response.text()).strip()
        except (aiohttp.ClientError, ValueError):
            return ""

    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()
        self._session = None
