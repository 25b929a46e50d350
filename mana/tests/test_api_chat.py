"""Tests for mana.api.chat — stateless question/answer endpoints."""

import httpx
import pytest

from mana.tutor.templates import JA

LONG_ANSWER = (
    "まず、両辺から3を引きます。例えば 2x + 3 = 7 なら 2x = 4 になります。"
    "次に、両辺を2で割ると x = 2 が解です。つまり、方程式は両辺に同じ操作をしても"
    "等しいままなので、その性質を使って文字だけを左辺に残すのがコツだと思います。"
)


class TestQuestion:
    """POST /api/v1/chat/question."""

    @pytest.mark.asyncio
    async def test_default_state_gets_beginner_question(
        self, api_client: httpx.AsyncClient
    ) -> None:
        async with api_client:
            resp = await api_client.post("/api/v1/chat/question", json={"topic": "algebra"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["ok"] is True
        assert body["data"]["topic"] == "algebra"
        assert body["data"]["question"] in JA.questions["algebra"]["beginner"]

    @pytest.mark.asyncio
    async def test_question_follows_understanding(self, api_client: httpx.AsyncClient) -> None:
        payload = {
            "topic": "geometry",
            "character_state": {"understanding": {"geometry": 85}},
        }
        async with api_client:
            resp = await api_client.post("/api/v1/chat/question", json=payload)
        assert resp.json()["data"]["question"] in JA.questions["geometry"]["advanced"]

    @pytest.mark.asyncio
    async def test_unknown_topic_rejected(self, api_client: httpx.AsyncClient) -> None:
        async with api_client:
            resp = await api_client.post("/api/v1/chat/question", json={"topic": "calculus"})
        assert resp.status_code == 422
        assert resp.json()["error"]["code"] == "VALIDATION_ERROR"


class TestAnswer:
    """POST /api/v1/chat/answer."""

    @pytest.mark.asyncio
    async def test_evaluation_and_merged_state(self, api_client: httpx.AsyncClient) -> None:
        payload = {"message": LONG_ANSWER, "topic": "algebra"}
        async with api_client:
            resp = await api_client.post("/api/v1/chat/answer", json=payload)

        assert resp.status_code == 200
        data = resp.json()["data"]
        evaluation = data["evaluation"]
        assert evaluation["source"] == "fallback"
        assert evaluation["quality"] in ("good", "excellent")
        state = data["character_state"]
        assert state["experience"] == evaluation["exp_gain"]
        assert state["understanding"]["algebra"] == evaluation["understanding_delta"]
        assert state["mood"] == evaluation["new_mood"]
        assert state["total_problems"] == 1
        assert data["level_up"] is False

    @pytest.mark.asyncio
    async def test_level_up_reported(self, api_client: httpx.AsyncClient) -> None:
        payload = {
            "message": LONG_ANSWER,
            "topic": "algebra",
            "character_state": {"level": 1, "experience": 95},
        }
        async with api_client:
            resp = await api_client.post("/api/v1/chat/answer", json=payload)
        data = resp.json()["data"]
        assert data["character_state"]["level"] == 2
        assert data["level_up"] is True

    @pytest.mark.asyncio
    async def test_history_accepted(self, api_client: httpx.AsyncClient) -> None:
        payload = {
            "message": "方程式",
            "topic": "algebra",
            "history": [
                {"role": "assistant", "content": "2x + 3 = 7 はどう解くの？"},
                {"role": "user", "content": "えっと"},
            ],
        }
        async with api_client:
            resp = await api_client.post("/api/v1/chat/answer", json=payload)
        assert resp.status_code == 200
        assert resp.json()["data"]["evaluation"]["quality"] == "average"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("message", ["", "   "])
    async def test_blank_message_rejected(
        self, api_client: httpx.AsyncClient, message: str
    ) -> None:
        async with api_client:
            resp = await api_client.post(
                "/api/v1/chat/answer", json={"message": message, "topic": "algebra"}
            )
        assert resp.status_code == 422
        body = resp.json()
        assert body["error"]["code"] == "VALIDATION_ERROR"
        assert "Message is required" in body["error"]["message"]

    @pytest.mark.asyncio
    async def test_invalid_mood_rejected(self, api_client: httpx.AsyncClient) -> None:
        payload = {
            "message": "x",
            "topic": "algebra",
            "character_state": {"mood": "grumpy"},
        }
        async with api_client:
            resp = await api_client.post("/api/v1/chat/answer", json=payload)
        assert resp.status_code == 422
