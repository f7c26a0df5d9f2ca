"""Tests for the /process and /analyze endpoints."""

import json
from unittest.mock import MagicMock, patch

from noteorganizer.config import Settings
from noteorganizer.processor import NoteProcessor

MEETING_NOTES = "meeting with marketing team\nsarah discussed q1 results\nbudget increased by 15%"
PROCESS_NOTES = "first user enters email\nthen creates password\nfinally account activated"


class TestProcessEndpoint:
    def test_organize_locally_without_key(self, client):
        response = client.post("/api/v1/process", json={"text": MEETING_NOTES, "mode": "organize"})

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "processed"
        assert data["source"] == "local"
        assert data["fallback_reason"] == "no API key configured"
        assert data["result"]["kind"] == "organized"
        assert data["result"]["category"] == "meeting"
        assert "- Sarah" in data["result"]["markdown"]
        assert "<li>Sarah</li>" in data["result"]["html"]
        assert data["result"]["mode"] == "organize"
        assert data["result"]["format"] == "markdown"

    def test_visualize(self, client):
        response = client.post("/api/v1/process", json={"text": PROCESS_NOTES, "mode": "visualize"})

        data = response.json()
        assert data["result"]["kind"] == "diagram"
        assert data["result"]["diagram_kind"] == "flowchart"
        assert data["result"]["dsl"].startswith("flowchart TD")
        assert data["result"]["mode"] == "visualize"
        assert data["result"]["format"] == "mermaid"

    def test_short_text_skipped(self, client):
        response = client.post("/api/v1/process", json={"text": "hi", "sequence": 7})

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "skipped"
        assert data["result"] is None
        assert data["sequence"] == 7

    def test_sequence_echoed(self, client):
        response = client.post("/api/v1/process", json={"text": MEETING_NOTES, "sequence": 3})
        assert response.json()["sequence"] == 3

    def test_remote_result(self, client):
        llm = MagicMock()
        payload = json.dumps({"mode": "organize", "content": "## Remote", "format": "markdown"})
        llm.generate.return_value = f"```json\n{payload}\n```"
        processor = NoteProcessor(
            Settings(api_key="k" * 40), llm_client_factory=MagicMock(return_value=llm)
        )

        with patch("noteorganizer.api.process.get_processor", return_value=processor):
            response = client.post("/api/v1/process", json={"text": MEETING_NOTES})

        data = response.json()
        assert data["source"] == "remote"
        assert data["result"]["markdown"] == "## Remote"

    def test_local_only_flag(self, client):
        response = client.post(
            "/api/v1/process", json={"text": MEETING_NOTES, "local_only": True}
        )
        assert response.json()["fallback_reason"] == "local processing requested"

    def test_missing_text_rejected(self, client):
        response = client.post("/api/v1/process", json={"mode": "organize"})
        assert response.status_code == 422

    def test_unknown_mode_rejected(self, client):
        response = client.post("/api/v1/process", json={"text": MEETING_NOTES, "mode": "draw"})
        assert response.status_code == 422


class TestAnalyzeEndpoint:
    def test_classification(self, client):
        response = client.post("/api/v1/analyze", json={"text": PROCESS_NOTES + "\nso happy!"})

        assert response.status_code == 200
        data = response.json()
        assert data["note_category"] == "general"
        assert data["diagram_kind"] == "flowchart"
        assert data["should_visualize"] is True
        assert data["tone"] == "happy"
        assert data["tone_intensity"] == 1.5
