import asyncio

import pytest
from aiohttp.test_utils import TestServer

from drawroom.core.errors import RoomConflictError, RoomServiceError
from drawroom.room.client import MALFORMED_RESPONSE, RoomServiceClient, RoomState

from fake_room_service import FakeRoomService


def run_with_service(service, scenario, room_id="r1"):
    async def runner():
        async with TestServer(service.app()) as server:
            base = str(server.make_url("")).rstrip("/")
            async with RoomServiceClient(api_base=base, room_id=room_id, timeout=5.0) as client:
                return await scenario(client)

    return asyncio.run(runner())


def test_get_room():
    service = FakeRoomService()

    async def scenario(client):
        return await client.get_room()

    room = run_with_service(service, scenario)
    assert room.room_id == "r1"
    assert [p.name for p in room.participants] == ["Alice", "Bob", "Carol"]
    assert room.is_draw_done is False
    assert room.winner is None
    assert [i.label for i in room.wheel_items()] == ["Alice", "Bob", "Carol"]


def test_draw_then_mutations_conflict():
    service = FakeRoomService()
    service.next_winner_index = 1

    async def scenario(client):
        response = await client.draw()
        room = await client.get_room()
        with pytest.raises(RoomConflictError) as exc:
            await client.add_participant("Eve")
        with pytest.raises(RoomConflictError):
            await client.delete_participant("p1")
        return response, room, exc.value

    response, room, conflict = run_with_service(service, scenario)
    assert response.winner.id == "p2"
    assert response.winner.name == "Bob"
    assert room.is_draw_done is True
    assert room.winner.name == "Bob"
    assert conflict.status == 409
    assert conflict.message == "Draw already finalized"


def test_add_delete_and_reset():
    service = FakeRoomService(names=("Alice",))

    async def scenario(client):
        added = await client.add_participant("Bob")
        await client.delete_participant("p1")
        await client.draw()
        await client.reset_draw()
        return added, await client.get_room()

    added, room = run_with_service(service, scenario)
    assert [p.name for p in added.participants] == ["Alice", "Bob"]
    assert [p.name for p in room.participants] == ["Bob"]
    assert room.is_draw_done is False
    assert room.winner_id is None


def test_http_error_carries_status():
    service = FakeRoomService()

    async def scenario(client):
        with pytest.raises(RoomServiceError) as exc:
            await client.get_room()
        return exc.value

    error = run_with_service(service, scenario, room_id="missing")
    assert error.status == 404
    assert not isinstance(error, RoomConflictError)
    assert "Room not found" in error.message


@pytest.mark.parametrize("body", [
    {"room_id": "r1"},
    {"room_id": "r1", "winner": None},
    {"room_id": "r1", "winner": {"name": "No id"}},
    ["not", "an", "object"],
    "{not json",
])
def test_malformed_draw_body_mapped(body):
    service = FakeRoomService()
    service.draw_body = body

    async def scenario(client):
        with pytest.raises(RoomServiceError) as exc:
            await client.draw()
        return exc.value

    error = run_with_service(service, scenario)
    assert error.message == MALFORMED_RESPONSE
    assert error.status is None


def test_network_error_mapped():
    async def scenario():
        async with RoomServiceClient(api_base="http://127.0.0.1:1", timeout=2.0) as client:
            with pytest.raises(RoomServiceError) as exc:
                await client.get_room()
            return exc.value

    error = asyncio.run(scenario())
    assert error.status is None
    assert error.message.startswith("Network error")


def test_room_state_parsing():
    room = RoomState.from_dict({
        "room_id": 7,
        "participants": [{"id": 1, "name": "A"}, {"id": 2, "name": "B"}],
        "is_draw_done": True,
        "winner_id": 2,
    })
    assert room.room_id == "7"
    assert room.winner.name == "B"
    assert room.find("3") is None

    # Winner only counts once the draw is done
    pending = RoomState.from_dict({"room_id": "r", "participants": [{"id": "x", "name": "X"}], "winner_id": "x"})
    assert pending.winner is None
