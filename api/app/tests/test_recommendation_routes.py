from __future__ import annotations

import uuid

import pytest
from sqlalchemy import func, select

from app.models.recommendation import Feedback, RecommendationHistory
from app.tests.utils import create_profile, create_record, fenced_json


async def _history_count(session) -> int:
    result = await session.execute(select(func.count(RecommendationHistory.id)))
    return result.scalar_one()


@pytest.mark.asyncio
async def test_recommendations_without_profile_do_not_call_model(client, llm_stub):
    response = await client.post("/api/recommendations", json={"type": "food"})
    assert response.status_code == 404
    assert "error" in response.json()
    assert llm_stub.calls == 0


@pytest.mark.asyncio
async def test_unparsable_model_output_returns_503_and_persists_nothing(client, llm_stub, session):
    await create_profile(client)
    llm_stub.response = "Sorry, I cannot help with that."

    response = await client.post("/api/recommendations", json={"type": "food"})
    assert response.status_code == 503
    assert "GEMINI_API_KEY" in response.json()["error"]
    assert await _history_count(session) == 0


@pytest.mark.asyncio
async def test_model_output_with_wrong_shape_returns_503(client, llm_stub, session):
    await create_profile(client)
    llm_stub.response = fenced_json({"recommendations": [{"name": "Only a name"}]})

    response = await client.post("/api/recommendations", json={"type": "food"})
    assert response.status_code == 503
    assert await _history_count(session) == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("limit", [0, 11])
async def test_limit_outside_range_is_rejected(client, llm_stub, limit):
    await create_profile(client)
    response = await client.post("/api/recommendations", json={"type": "food", "limit": limit})
    assert response.status_code == 422
    assert llm_stub.calls == 0


@pytest.mark.asyncio
async def test_food_recommendation_end_to_end(client, llm_stub, session):
    await create_profile(client, name="Alice", preferences={"food": ["korean"]})
    await create_record(client, type="food", title="Bibimbap", rating=5)

    response = await client.post(
        "/api/recommendations", json={"type": "food", "context": "rainy evening", "location": "Mapo"}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["type"] == "food"
    assert body["context"] == "rainy evening"
    assert body["generatedAt"]
    assert len(body["recommendations"]) == 3
    first = body["recommendations"][0]
    assert first["name"] == "Kimchi stew"
    assert uuid.UUID(first["id"])

    prompt = llm_stub.prompts[0]
    assert "korean" in prompt
    assert "Bibimbap (5/5" in prompt
    assert "rainy evening" in prompt
    assert "Current location: Mapo" in prompt

    assert await _history_count(session) == 3
    history = (await client.get("/api/recommendations/history")).json()["history"]
    assert {entry["name"] for entry in history} == {"Kimchi stew", "Dolsot bibimbap", "Naengmyeon"}
    assert all(entry["context"] == "rainy evening" for entry in history)


@pytest.mark.asyncio
async def test_results_are_truncated_to_limit(client, session):
    await create_profile(client)
    response = await client.post("/api/recommendations", json={"type": "travel", "limit": 2})
    assert response.status_code == 200
    assert [item["name"] for item in response.json()["recommendations"]] == ["Kimchi stew", "Dolsot bibimbap"]
    assert await _history_count(session) == 2


@pytest.mark.asyncio
async def test_history_filters_by_type(client):
    await create_profile(client)
    await client.post("/api/recommendations", json={"type": "food", "limit": 1})
    await client.post("/api/recommendations", json={"type": "exercise", "limit": 2})

    exercise = (await client.get("/api/recommendations/history", params={"type": "exercise"})).json()
    assert len(exercise["history"]) == 2
    assert all(entry["type"] == "exercise" for entry in exercise["history"])
    everything = (await client.get("/api/recommendations/history")).json()
    assert len(everything["history"]) == 3


@pytest.mark.asyncio
async def test_history_without_profile_is_empty(client):
    response = await client.get("/api/recommendations/history")
    assert response.status_code == 200
    assert response.json() == {"history": []}


@pytest.mark.asyncio
async def test_feedback_for_unknown_recommendation_still_succeeds(client, session):
    await create_profile(client)
    response = await client.post(f"/api/recommendations/{uuid.uuid4()}/feedback", json={"liked": True})
    assert response.status_code == 200
    assert response.json()["success"] is True

    result = await session.execute(select(func.count(Feedback.id)))
    assert result.scalar_one() == 0


@pytest.mark.asyncio
async def test_feedback_is_attached_and_latest_wins(client, session):
    await create_profile(client)
    generated = (await client.post("/api/recommendations", json={"type": "food", "limit": 1})).json()
    rec_id = generated["recommendations"][0]["id"]

    first = await client.post(f"/api/recommendations/{rec_id}/feedback", json={"liked": True})
    assert first.status_code == 200
    second = await client.post(
        f"/api/recommendations/{rec_id}/feedback", json={"liked": False, "reason": "Too spicy"}
    )
    assert second.status_code == 200

    result = await session.execute(select(func.count(Feedback.id)))
    assert result.scalar_one() == 2

    history = (await client.get("/api/recommendations/history")).json()["history"]
    assert history[0]["feedback"] == {"liked": False, "reason": "Too spicy"}


@pytest.mark.asyncio
async def test_feedback_stats(client):
    await create_profile(client)
    food = (await client.post("/api/recommendations", json={"type": "food", "limit": 2})).json()
    travel = (await client.post("/api/recommendations", json={"type": "travel", "limit": 1})).json()

    await client.post(f"/api/recommendations/{food['recommendations'][0]['id']}/feedback", json={"liked": True})
    await client.post(f"/api/recommendations/{food['recommendations'][1]['id']}/feedback", json={"liked": False})
    await client.post(f"/api/recommendations/{travel['recommendations'][0]['id']}/feedback", json={"liked": True})

    stats = (await client.get("/api/recommendations/feedback/stats")).json()
    assert stats["total"] == 3
    assert stats["liked"] == 2
    assert stats["disliked"] == 1
    assert stats["byType"]["food"] == {"liked": 1, "disliked": 1}
    assert stats["byType"]["travel"] == {"liked": 1, "disliked": 0}
    assert stats["byType"]["exercise"] == {"liked": 0, "disliked": 0}


@pytest.mark.asyncio
async def test_analysis_without_records_skips_model(client, llm_stub):
    await create_profile(client)
    response = await client.post("/api/recommendations/analysis")
    assert response.status_code == 200
    assert response.json()["suggestions"]
    assert llm_stub.calls == 0


@pytest.mark.asyncio
async def test_analysis_parses_model_patterns(client, llm_stub):
    await create_profile(client)
    await create_record(client, description="Spicy and warm")
    llm_stub.response = fenced_json(
        {
            "patterns": {"food": ["Prefers warm Korean dishes"], "travel": [], "exercise": []},
            "suggestions": ["Add 'spicy' to food preferences"],
            "insights": "Comfort food fan.",
        }
    )

    response = await client.post("/api/recommendations/analysis")
    assert response.status_code == 200
    body = response.json()
    assert body["patterns"]["food"] == ["Prefers warm Korean dishes"]
    assert body["insights"] == "Comfort food fan."
    assert "Spicy and warm" in llm_stub.prompts[0]


@pytest.mark.asyncio
async def test_chat_seeds_persona_and_returns_reply(client, llm_stub):
    await create_profile(client, name="Alice")
    response = await client.post("/api/chat", json={"message": "What should I eat tonight?"})
    assert response.status_code == 200
    assert response.json() == {"reply": llm_stub.reply}

    history = llm_stub.chats[0]
    assert [message.role for message in history] == ["user", "model", "user"]
    assert "Alice" in history[0].content
    assert history[-1].content == "What should I eat tonight?"


@pytest.mark.asyncio
async def test_chat_without_profile_returns_404(client, llm_stub):
    response = await client.post("/api/chat", json={"message": "hello"})
    assert response.status_code == 404
    assert llm_stub.calls == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("score", ["NaN", "Infinity", "-Infinity", "1e999"])
async def test_non_finite_scores_return_503_and_persist_nothing(client, llm_stub, session, score):
    await create_profile(client)
    llm_stub.response = '{"recommendations": [{"name": "X", "reason": "y", "score": %s}]}' % score

    response = await client.post("/api/recommendations", json={"type": "food"})
    assert response.status_code == 503
    assert await _history_count(session) == 0


@pytest.mark.asyncio
async def test_feedback_analysis_returns_model_adjustments(client, llm_stub):
    await create_profile(client)
    generated = (await client.post("/api/recommendations", json={"type": "food", "limit": 1})).json()
    rec_id = generated["recommendations"][0]["id"]
    llm_stub.response = fenced_json(
        {
            "adjustment": "Lower the spice level",
            "avoid": ["very spicy stews"],
            "prefer": ["mild broths"],
            "note": "Dislikes heat on weeknights",
        }
    )

    response = await client.post(
        f"/api/recommendations/{rec_id}/feedback/analysis", json={"liked": False, "reason": "Too spicy"}
    )
    assert response.status_code == 200
    assert response.json() == {
        "adjustment": "Lower the spice level",
        "avoid": ["very spicy stews"],
        "prefer": ["mild broths"],
        "note": "Dislikes heat on weeknights",
    }
    prompt = llm_stub.prompts[-1]
    assert '"Kimchi stew"' in prompt
    assert "did not like" in prompt
    assert "Reason: Too spicy" in prompt


@pytest.mark.asyncio
async def test_feedback_analysis_for_unknown_recommendation_returns_404(client, llm_stub):
    await create_profile(client)
    response = await client.post(f"/api/recommendations/{uuid.uuid4()}/feedback/analysis", json={"liked": True})
    assert response.status_code == 404
    assert response.json() == {"error": "Recommendation not found"}
    assert llm_stub.calls == 0


@pytest.mark.asyncio
async def test_feedback_analysis_with_wrong_shape_returns_503(client, llm_stub):
    await create_profile(client)
    generated = (await client.post("/api/recommendations", json={"type": "food", "limit": 1})).json()
    rec_id = generated["recommendations"][0]["id"]
    llm_stub.response = fenced_json({"avoid": "not a list"})

    response = await client.post(f"/api/recommendations/{rec_id}/feedback/analysis", json={"liked": True})
    assert response.status_code == 503
