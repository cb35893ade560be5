"""In-process Room Service used by the client and orchestrator tests."""

from aiohttp import web


class FakeRoomService:
    """Keeps one room in memory and serves the Room Service API."""

    def __init__(self, room_id="r1", names=("Alice", "Bob", "Carol")):
        self.room_id = room_id
        self.participants = [{"id": f"p{i + 1}", "name": n} for i, n in enumerate(names)]
        self.is_draw_done = False
        self.winner_id = None
        self.next_winner_index = 0
        self.fail_draw_with = None
        self.draw_body = None
        self._counter = len(self.participants)

    def snapshot(self):
        data = {
            "room_id": self.room_id,
            "participants": list(self.participants),
            "is_draw_done": self.is_draw_done,
        }
        if self.winner_id is not None:
            data["winner_id"] = self.winner_id
        return data

    def app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/rooms/{room_id}", self.get_room)
        app.router.add_post("/rooms/{room_id}/participants", self.add_participant)
        app.router.add_delete("/rooms/{room_id}/participants/{pid}", self.delete_participant)
        app.router.add_post("/rooms/{room_id}/draw", self.draw)
        app.router.add_post("/rooms/{room_id}/reset_draw", self.reset_draw)
        return app

    def _check_room(self, request):
        if request.match_info["room_id"] != self.room_id:
            raise web.HTTPNotFound(text="Room not found")

    def _conflict(self):
        return web.json_response({"detail": "Draw already finalized"}, status=409)

    async def get_room(self, request):
        self._check_room(request)
        return web.json_response(self.snapshot())

    async def add_participant(self, request):
        self._check_room(request)
        if self.is_draw_done:
            return self._conflict()
        body = await request.json()
        self._counter += 1
        self.participants.append({"id": f"p{self._counter}", "name": body["name"]})
        return web.json_response(self.snapshot())

    async def delete_participant(self, request):
        self._check_room(request)
        if self.is_draw_done:
            return self._conflict()
        pid = request.match_info["pid"]
        self.participants = [p for p in self.participants if p["id"] != pid]
        return web.Response(status=204)

    async def draw(self, request):
        self._check_room(request)
        if self.fail_draw_with is not None:
            return web.json_response({"detail": "draw failed"}, status=self.fail_draw_with)
        if isinstance(self.draw_body, str):
            return web.Response(text=self.draw_body, content_type="application/json")
        if self.draw_body is not None:
            return web.json_response(self.draw_body)
        if self.is_draw_done:
            return self._conflict()
        if not self.participants:
            return web.json_response({"detail": "No participants"}, status=400)
        winner = self.participants[self.next_winner_index % len(self.participants)]
        self.is_draw_done = True
        self.winner_id = winner["id"]
        return web.json_response({"room_id": self.room_id, "winner": winner})

    async def reset_draw(self, request):
        self._check_room(request)
        self.is_draw_done = False
        self.winner_id = None
        return web.json_response({"room_id": self.room_id, "is_draw_done": False})
