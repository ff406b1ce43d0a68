"""
Tests for the HTTP client used by the lookup flow and the admin editor
"""

import json

import httpx
import pytest

from app.core.errors import ConflictError, NotFoundError, PersistenceError, VotingClosedError
from app.services.directory_client import NETWORK_FALLBACK_TEXT, SeatDirectoryClient
from app.services.fortune_service import FALLBACK_TEXT
from app.services.layout_editor import LayoutEditor

TABLES = [
    {
        "id": "t1",
        "name": "VIP 主桌",
        "x": 300,
        "y": 50,
        "seats": [
            {"id": "t1-s1", "seatNumber": 1, "attendeeName": "张三"},
            {"id": "t1-s2", "seatNumber": 2, "attendeeName": None},
        ],
    }
]

PHOTO = {
    "id": "p1",
    "filename": "photo-1.png",
    "originalFilename": "a.png",
    "filePath": "/uploads/photo-1.png",
    "imageUrl": "/uploads/photo-1.png",
    "uploaderIp": "1.1.1.1",
    "voteCount": 1,
    "hasVoted": True,
}

class FakeServer:
    """Routes requests of a MockTransport to canned responses"""

    def __init__(self):
        self.requests = []
        self.save_status = 200
        self.vote_response = (200, {"success": True, "photo": PHOTO})
        self.fortune_response = (200, {"text": "鸿运当头"})

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if request.method == "GET" and path == "/api/tables":
            return httpx.Response(200, json=TABLES)
        if request.method == "POST" and path == "/api/tables":
            if self.save_status != 200:
                return httpx.Response(self.save_status, json={"success": False, "error": "Failed to save data"})
            return httpx.Response(200, json={"success": True})
        if path == "/api/photos":
            return httpx.Response(200, json=[PHOTO])
        if path.endswith("/vote"):
            status, body = self.vote_response
            return httpx.Response(status, json=body)
        if path == "/api/fortune":
            status, body = self.fortune_response
            return httpx.Response(status, json=body)
        if path == "/api/voting/status":
            body = {"votingEnabled": True, "votingStopped": False}
            if request.method == "POST":
                body.update(json.loads(request.content))
            return httpx.Response(200, json=body)
        return httpx.Response(404, json={"detail": "Not Found"})

@pytest.fixture
def server():
    return FakeServer()

@pytest.fixture
def directory(server):
    http = httpx.Client(base_url="http://test", transport=httpx.MockTransport(server))
    with SeatDirectoryClient(client=http, admin_token="secret") as client:
        yield client

def test_lookup_uses_load_time_snapshot(directory, server):
    """Test lookups after the first fetch never hit the network"""
    ref = directory.find_seat(" 张三 ")
    assert ref.table_name == "VIP 主桌"
    assert ref.seat_number == 1

    with pytest.raises(NotFoundError):
        directory.find_seat("张三丰")
    assert len(server.requests) == 1

def test_save_sends_full_layout_with_token(directory, server):
    editor = LayoutEditor(directory.fetch_tables())
    editor.move_table("t1", 10.5, 20)
    editor.save(directory)

    request = server.requests[-1]
    assert request.headers["Authorization"] == "Bearer secret"
    body = json.loads(request.content)
    assert body[0]["x"] == 10.5
    assert body[0]["seats"][0] == {"id": "t1-s1", "seatNumber": 1, "attendeeName": "张三"}
    assert editor.unsaved is False

def test_failed_save_raises_persistence_error(directory, server):
    server.save_status = 500
    editor = LayoutEditor(directory.fetch_tables())
    editor.move_table("t1", 1, 1)

    with pytest.raises(PersistenceError):
        editor.save(directory)
    assert editor.unsaved is True

def test_network_failure_is_persistence_error():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    http = httpx.Client(base_url="http://test", transport=httpx.MockTransport(refuse))
    directory = SeatDirectoryClient(client=http)
    with pytest.raises(PersistenceError):
        directory.fetch_tables()
    assert directory.fortune("张三", "VIP") == NETWORK_FALLBACK_TEXT

def test_vote_success(directory):
    photo = directory.vote("p1")
    assert photo.vote_count == 1
    assert photo.has_voted is True

def test_vote_conflict(directory, server):
    server.vote_response = (400, {"success": False, "error": "您已经投过票了", "error_code": "ALREADY_VOTED"})
    with pytest.raises(ConflictError):
        directory.vote("p1")

def test_vote_closed(directory, server):
    server.vote_response = (403, {"success": False, "error": "投票已关闭", "error_code": "VOTING_CLOSED"})
    with pytest.raises(VotingClosedError):
        directory.vote("p1")

def test_fortune(directory, server):
    assert directory.fortune("张三", "VIP") == "鸿运当头"
    server.fortune_response = (400, {"text": "缺少必要参数"})
    assert directory.fortune("", "VIP") == FALLBACK_TEXT

def test_set_voting_status(directory, server):
    status = directory.set_voting_status(voting_stopped=True)
    assert status.voting_stopped is True
    assert json.loads(server.requests[-1].content) == {"votingStopped": True}

def test_watch_photos_polls_until_stopped(directory, server):
    """Test polling yields the list each tick and sleeps the interval between"""
    sleeps = []
    ticks = iter([False, False, False, True])

    batches = list(directory.watch_photos(interval=5, should_stop=lambda: next(ticks), sleep=sleeps.append))

    assert len(batches) == 2
    assert batches[0][0].id == "p1"
    assert sleeps == [5]
