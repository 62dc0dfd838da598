"""Integration tests for terminal routes.

- POST /terminal/command - Run one command line
- GET /terminal/history - Read the transcript
- GET /terminal/tree - Discovered-only file tree
"""


class TestRunCommand:
    """Tests for POST /terminal/command."""

    def test_returns_new_entries(self, client_with_session):
        """Test a command returns its input echo and output."""
        client, session = client_with_session

        response = client.post("/terminal/command", json={"line": "cd /data"})

        assert response.status_code == 200
        data = response.json()
        assert data["game_state"] == "PLAYING"
        assert data["current_path"] == "/data"
        assert [e["kind"] for e in data["entries"]] == ["input"]
        assert data["entries"][0]["text"] == "cd /data"
        assert data["entries"][0]["path"] == "/"
        assert session.current_path == ("data",)

    def test_shell_errors_are_ordinary_output(self, client_with_session):
        """Test a failing command is a 200 with one output line."""
        client, _ = client_with_session

        response = client.post("/terminal/command", json={"line": "dance"})

        assert response.status_code == 200
        entries = response.json()["entries"]
        assert entries[1] == {
            "id": entries[1]["id"],
            "kind": "output",
            "text": "Command not found: dance",
            "path": None,
        }

    def test_blank_line_returns_no_entries(self, client_with_session):
        client, session = client_with_session
        before = len(session.transcript)

        response = client.post("/terminal/command", json={"line": "   "})

        assert response.status_code == 200
        assert response.json()["entries"] == []
        assert len(session.transcript) == before

    def test_conflict_while_booting(self, client_while_booting):
        """Test commands are rejected with 409 outside PLAYING."""
        client, _ = client_while_booting

        response = client.post("/terminal/command", json={"line": "ls"})

        assert response.status_code == 409
        data = response.json()
        assert data["game_state"] == "BOOT"
        assert "PLAYING" in data["detail"]

    def test_missing_line_is_rejected(self, client_with_session):
        client, _ = client_with_session

        response = client.post("/terminal/command", json={})

        assert response.status_code == 422


class TestGetHistory:
    """Tests for GET /terminal/history."""

    def test_full_history(self, client_with_session):
        client, session = client_with_session

        response = client.get("/terminal/history")

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == len(session.transcript)
        assert data["entries"][-1]["text"].startswith("Connection established")

    def test_since_returns_new_lines_only(self, client_with_session):
        """Test polling picks up lines added by delayed resolutions."""
        client, session = client_with_session
        client.post("/terminal/command", json={"line": "cd /tools"})
        client.post("/terminal/command", json={"line": "./alarm.sh"})
        seen = client.get("/terminal/history").json()["total"]

        client.post("/game/time/advance", json={"seconds": 1.0})
        data = client.get("/terminal/history", params={"since": seen}).json()

        assert [e["kind"] for e in data["entries"]] == ["output", "narration"]
        assert data["total"] == seen + 2

    def test_negative_since_rejected(self, client_with_session):
        client, _ = client_with_session

        assert client.get("/terminal/history", params={"since": -1}).status_code == 422


class TestGetTree:
    """Tests for GET /terminal/tree."""

    def test_undiscovered_directories_have_no_children(self, client_with_session):
        client, _ = client_with_session

        data = client.get("/terminal/tree").json()

        assert data["path"] == "/"
        assert data["discovered"] is True
        data_dir = next(c for c in data["children"] if c["name"] == "data")
        assert data_dir["discovered"] is False
        assert "children" not in data_dir

    def test_listing_discovers_and_hides_hidden_nodes(self, client_with_session):
        client, _ = client_with_session
        client.post("/terminal/command", json={"line": "cd /tools"})
        client.post("/terminal/command", json={"line": "ls"})

        data = client.get("/terminal/tree").json()
        tools = next(c for c in data["children"] if c["name"] == "tools")

        assert [c["name"] for c in tools["children"]] == ["alarm.sh", "disguise.sh"]
        assert tools["children"][0] == {
            "name": "alarm.sh",
            "type": "FILE",
            "path": "/tools/alarm.sh",
            "isLocked": False,
        }
