"""Socket.IO transport tests using the Flask-SocketIO test client."""


def names(client) -> list[str]:
    return [packet["name"] for packet in client.get_received()]


def state_of(client, room_id: str = "table") -> dict:
    ack = client.emit("room:getState", {"room_id": room_id}, callback=True)
    assert ack["success"], ack
    return ack["game_state"]


def create_table(make_sio_client, players: int = 2):
    """Create 'table' with the first client as owner and seat the rest."""
    clients = [make_sio_client() for _ in range(players)]
    ack = clients[0].emit("room:create", {"room_id": "table", "player_name": "Alice"}, callback=True)
    assert ack == {"success": True, "room_id": "table"}
    for seat, client in enumerate(clients[1:], start=1):
        ack = client.emit("room:join", {"roomId": "table", "playerName": f"Player {seat}"}, callback=True)
        assert ack["success"], ack
    return clients


def start_table(make_sio_client, players: int = 2):
    """Created and dealt; returns (opener, others)."""
    clients = create_table(make_sio_client, players)
    assert clients[0].emit("game:start", {"room_id": "table"}, callback=True) == {"success": True}
    opener = next(c for c in clients if state_of(c)["is_my_turn"])
    others = [c for c in clients if c is not opener]
    for c in clients:
        c.get_received()
    return opener, others


class TestHttp:
    """Tests for the HTTP routes."""

    def test_health(self, client):
        res = client.get("/health")
        assert res.status_code == 200
        assert res.get_json() == {"status": "ok"}

    def test_rooms(self, client, make_sio_client):
        assert client.get("/rooms").get_json() == {"rooms": []}
        create_table(make_sio_client, players=1)
        assert client.get("/rooms").get_json() == {"rooms": ["table"]}


class TestLobby:
    """Tests for room:create, room:join and game:start."""

    def test_create_emits_room_created(self, make_sio_client):
        alice = make_sio_client()
        alice.emit("room:create", {"room_id": "table", "player_name": "Alice"}, callback=True)
        received = alice.get_received()
        created = [p for p in received if p["name"] == "room:created"]
        assert len(created) == 1
        payload = created[0]["args"][0]
        assert payload["room_id"] == "table"
        assert payload["game_state"]["players"][0]["name"] == "Alice"

    def test_duplicate_room(self, make_sio_client):
        create_table(make_sio_client, players=1)
        bob = make_sio_client()
        ack = bob.emit("room:create", {"room_id": "table", "player_name": "Bob"}, callback=True)
        assert ack == {"success": False, "error": "RoomAlreadyExists"}

    def test_join_broadcasts_update(self, make_sio_client, registry):
        alice = make_sio_client()
        alice.emit("room:create", {"room_id": "table", "player_name": "Alice"}, callback=True)
        alice.get_received()
        bob = make_sio_client()
        bob.emit("room:join", {"room_id": "table", "player_name": "Bob"}, callback=True)

        assert "room:joined" in names(bob)
        updates = [p for p in alice.get_received() if p["name"] == "game:update"]
        assert [pl["name"] for pl in updates[-1]["args"][0]["players"]] == ["Alice", "Bob"]
        assert len(registry.get_room("table").state.players) == 2

    def test_join_missing_room(self, make_sio_client):
        ack = make_sio_client().emit("room:join", {"room_id": "nope", "player_name": "Bob"}, callback=True)
        assert ack == {"success": False, "error": "RoomNotFound"}

    def test_room_full(self, make_sio_client):
        create_table(make_sio_client, players=4)
        ack = make_sio_client().emit("room:join", {"room_id": "table", "player_name": "Eve"}, callback=True)
        assert ack == {"success": False, "error": "RoomFull"}

    def test_only_owner_starts(self, make_sio_client):
        alice, bob = create_table(make_sio_client)
        assert bob.emit("game:start", {"room_id": "table"}, callback=True) == {
            "success": False, "error": "NotGameMaster",
        }

    def test_start_needs_two(self, make_sio_client):
        (alice,) = create_table(make_sio_client, players=1)
        ack = alice.emit("game:start", {"room_id": "table"}, callback=True)
        assert ack == {"success": False, "error": "NotEnoughPlayers"}

    def test_start_sends_private_hands(self, make_sio_client):
        alice, bob = create_table(make_sio_client)
        bob.get_received()
        alice.emit("game:start", {"room_id": "table"}, callback=True)

        received = bob.get_received()
        assert "game:started" in [p["name"] for p in received]
        private = [p["args"][0] for p in received if p["name"] == "game:stateUpdate"]
        assert len(private[-1]["my_hand"]) == 14
        started = [p["args"][0] for p in received if p["name"] == "game:started"][0]
        assert "my_hand" not in started

    def test_join_after_start(self, make_sio_client):
        start_table(make_sio_client)
        ack = make_sio_client().emit("room:join", {"room_id": "table", "player_name": "Late"}, callback=True)
        assert ack == {"success": False, "error": "GameAlreadyStarted"}


class TestTurns:
    """Tests for the turn events."""

    def test_starter_then_play_then_doubt(self, make_sio_client):
        opener, (other,) = start_table(make_sio_client)

        ack = opener.emit("turn:submitStarter", {"room_id": "table", "number_choice": 3}, callback=True)
        assert ack == {"success": True}
        assert state_of(opener)["phase"] == "PLAY"

        tile = state_of(opener)["my_hand"][0]
        ack = opener.emit("turn:play", {"room_id": "table", "tiles": [tile]}, callback=True)
        assert ack == {"success": True}
        received = other.get_received()
        update = [p["args"][0] for p in received if p["name"] == "game:update"][-1]
        assert update["board_size"] == 1
        assert update["last_submission_player_id"] is not None
        assert "game:event" in [p["name"] for p in received]

        ack = other.emit("turn:doubt", {"room_id": "table"}, callback=True)
        assert ack["success"]
        assert ack["penalty"] in ("SUBMITTER", "DOUBTER")
        resolved = [p["args"][0] for p in opener.get_received() if p["name"] == "game:doubtResolved"]
        assert resolved[0]["penalty"] == ack["penalty"]
        assert resolved[0]["game_state"]["needs_number_choice"] is True

    def test_tiles_as_pairs(self, make_sio_client):
        opener, _ = start_table(make_sio_client)
        opener.emit("turn:submitStarter", {"roomId": "table", "numberChoice": 1}, callback=True)
        tile = state_of(opener)["my_hand"][0]
        ack = opener.emit("turn:play", {"room_id": "table", "tiles": [[tile["b"], tile["a"]]]}, callback=True)
        assert ack == {"success": True}

    def test_engine_errors_are_acked(self, make_sio_client):
        opener, (other,) = start_table(make_sio_client)
        ack = other.emit("turn:submitStarter", {"room_id": "table", "number_choice": 3}, callback=True)
        assert ack == {"success": False, "error": "NotYourTurn"}
        ack = opener.emit("turn:submitStarter", {"room_id": "table", "number_choice": 9}, callback=True)
        assert ack == {"success": False, "error": "InvalidNumberChoice"}
        ack = opener.emit("turn:noTile", {"room_id": "table"}, callback=True)
        assert ack == {"success": False, "error": "WrongPhase"}
        assert names(other) == []

    def test_pass_cycle_requests_number(self, make_sio_client):
        opener, (other,) = start_table(make_sio_client)
        opener.emit("turn:submitStarter", {"room_id": "table", "number_choice": 3}, callback=True)
        assert opener.emit("turn:noTile", {"room_id": "table"}, callback=True) == {"success": True}
        ack = other.emit("turn:noTile", {"room_id": "table"}, callback=True)
        assert ack == {"success": True, "action": "CHOOSE_NUMBER"}
        ack = opener.emit("turn:chooseNumber", {"room_id": "table", "number_choice": 5}, callback=True)
        assert ack == {"success": True}
        assert state_of(other)["current_number"] == 5

    def test_accept_is_acknowledged(self, make_sio_client):
        opener, (other,) = start_table(make_sio_client)
        assert other.emit("turn:accept", {"room_id": "table"}, callback=True) == {"success": True}


class TestPayloadsAndAccess:
    """Malformed payloads and callers outside the room."""

    def test_missing_room_id(self, make_sio_client):
        ack = make_sio_client().emit("turn:noTile", {}, callback=True)
        assert ack == {"success": False, "error": "InvalidPayload"}

    def test_bad_tile(self, make_sio_client):
        opener, _ = start_table(make_sio_client)
        ack = opener.emit("turn:play", {"room_id": "table", "tiles": [{"a": 9, "b": 1}]}, callback=True)
        assert ack == {"success": False, "error": "InvalidPayload"}

    def test_no_payload(self, make_sio_client):
        ack = make_sio_client().emit("game:start", callback=True)
        assert ack == {"success": False, "error": "InvalidPayload"}

    def test_unknown_room(self, make_sio_client):
        ack = make_sio_client().emit("turn:doubt", {"room_id": "nope"}, callback=True)
        assert ack == {"success": False, "error": "RoomNotFound"}

    def test_state_for_outsider(self, make_sio_client):
        create_table(make_sio_client, players=1)
        ack = make_sio_client().emit("room:getState", {"room_id": "table"}, callback=True)
        assert ack == {"success": False, "error": "NotInRoom"}

    def test_second_room_for_same_socket(self, make_sio_client):
        (alice,) = create_table(make_sio_client, players=1)
        ack = alice.emit("room:create", {"room_id": "other", "player_name": "Alice"}, callback=True)
        assert ack == {"success": False, "error": "AlreadyInRoom"}


class TestDisconnect:
    """Rooms are dropped once nobody seated is connected."""

    def test_last_player_leaving_deletes_room(self, make_sio_client, registry):
        alice, bob = create_table(make_sio_client)
        alice.disconnect()
        assert registry.room_exists("table")
        bob.disconnect()
        assert not registry.room_exists("table")
