"""
Happy Thoughts API — Route Tests
==================================

What:  End-to-end tests of the /thoughts endpoints.
How:   HTTPX AsyncClient against the app, backed by a fresh SQLite database
       per test (see conftest.test_client).
"""

import asyncio
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from thoughts_api.models.thought import Thought


def parse_timestamp(value: str) -> datetime:
    """createdAt as an aware datetime ("Z" suffix or explicit offset)."""
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


class TestCreateThought:

    @pytest.mark.asyncio
    async def test_create_returns_201_with_defaults(self, test_client):
        before = datetime.now(timezone.utc)

        response = await test_client.post("/thoughts", json={"message": "Hello world"})

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Hello world"
        assert body["hearts"] == 0
        assert body["id"]
        assert parse_timestamp(body["createdAt"]) >= before

    @pytest.mark.asyncio
    async def test_create_trims_message(self, test_client):
        response = await test_client.post("/thoughts", json={"message": "   Hello world   "})
        assert response.json()["message"] == "Hello world"

    @pytest.mark.asyncio
    async def test_client_cannot_set_hearts_or_created_at(self, test_client):
        response = await test_client.post(
            "/thoughts",
            json={"message": "Hello world", "hearts": 99, "createdAt": "2000-01-01T00:00:00Z"},
        )
        body = response.json()
        assert body["hearts"] == 0
        assert parse_timestamp(body["createdAt"]).year > 2000

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload, expected",
        [
            ({"message": "hi"}, ["Message must be at least 5 characters"]),
            ({"message": "   hey   "}, ["Message must be at least 5 characters"]),
            ({"message": "x" * 141}, ["Message cannot exceed 140 characters"]),
            ({}, ["Message is required"]),
            ({"message": 42}, ["Message must be text"]),
            ({"message": "  hello  \x00"}, ["Message cannot contain control characters"]),
        ],
    )
    async def test_create_validation_errors(self, test_client, payload, expected):
        response = await test_client.post("/thoughts", json=payload)

        assert response.status_code == 400
        assert response.json() == {"error": "Validation failed", "messages": expected}

    @pytest.mark.asyncio
    async def test_create_without_body(self, test_client):
        response = await test_client.post("/thoughts")
        assert response.status_code == 400
        assert response.json()["messages"] == ["Message is required"]

    @pytest.mark.asyncio
    async def test_create_with_non_object_body(self, test_client):
        response = await test_client.post("/thoughts", json=["Hello world"])

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Validation failed"
        assert len(body["messages"]) >= 1

    @pytest.mark.asyncio
    async def test_rejected_create_stores_nothing(self, test_client):
        await test_client.post("/thoughts", json={"message": "hi"})
        response = await test_client.get("/thoughts")
        assert response.json() == []


class TestListThoughts:

    @pytest.mark.asyncio
    async def test_empty_list(self, test_client):
        response = await test_client.get("/thoughts")
        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_newest_twenty_first(self, test_client, session_factory):
        now = datetime.now(timezone.utc)
        async with session_factory() as session:
            for i in range(25):
                session.add(
                    Thought(
                        message=f"Thought number {i}",
                        hearts=0,
                        created_at=now - timedelta(minutes=i),
                    )
                )
            await session.commit()

        response = await test_client.get("/thoughts")

        assert response.status_code == 200
        thoughts = response.json()
        assert len(thoughts) == 20
        assert thoughts[0]["message"] == "Thought number 0"
        assert thoughts[-1]["message"] == "Thought number 19"
        timestamps = [parse_timestamp(t["createdAt"]) for t in thoughts]
        assert timestamps == sorted(timestamps, reverse=True)


class TestGetThought:

    @pytest.mark.asyncio
    async def test_get_existing(self, test_client, created_thought):
        response = await test_client.get(f"/thoughts/{created_thought['id']}")

        assert response.status_code == 200
        assert response.json()["id"] == created_thought["id"]
        assert response.json()["message"] == "Berlin baby"

    @pytest.mark.asyncio
    async def test_get_unknown_id_is_404(self, test_client):
        response = await test_client.get(f"/thoughts/{uuid4()}")

        assert response.status_code == 404
        assert response.json() == {"error": "Thought not found"}


class TestLikeThought:

    @pytest.mark.asyncio
    async def test_two_likes(self, test_client, created_thought):
        url = f"/thoughts/{created_thought['id']}/like"

        first = await test_client.post(url)
        second = await test_client.post(url)

        assert first.status_code == 200
        assert first.json()["hearts"] == created_thought["hearts"] + 1
        assert second.json()["hearts"] == created_thought["hearts"] + 2

    @pytest.mark.asyncio
    async def test_like_leaves_message_and_timestamp(self, test_client, created_thought):
        response = await test_client.post(f"/thoughts/{created_thought['id']}/like")
        body = response.json()
        assert body["message"] == created_thought["message"]
        assert parse_timestamp(body["createdAt"]) == parse_timestamp(created_thought["createdAt"])

    @pytest.mark.asyncio
    async def test_concurrent_likes_are_not_lost(self, test_client, created_thought):
        url = f"/thoughts/{created_thought['id']}/like"
        likes = 10

        responses = await asyncio.gather(*(test_client.post(url) for _ in range(likes)))

        assert all(r.status_code == 200 for r in responses)
        final = await test_client.get(f"/thoughts/{created_thought['id']}")
        assert final.json()["hearts"] == likes

    @pytest.mark.asyncio
    async def test_like_unknown_id_is_404(self, test_client):
        response = await test_client.post(f"/thoughts/{uuid4()}/like")
        assert response.status_code == 404


class TestUpdateThought:

    @pytest.mark.asyncio
    async def test_update_message(self, test_client, created_thought):
        await test_client.post(f"/thoughts/{created_thought['id']}/like")

        response = await test_client.put(
            f"/thoughts/{created_thought['id']}", json={"message": "  Berlin, baby!  "}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Berlin, baby!"
        assert body["hearts"] == 1
        assert body["id"] == created_thought["id"]

    @pytest.mark.asyncio
    async def test_update_validation_keeps_old_message(self, test_client, created_thought):
        response = await test_client.put(
            f"/thoughts/{created_thought['id']}", json={"message": "no"}
        )

        assert response.status_code == 400
        assert response.json()["messages"] == ["Message must be at least 5 characters"]
        stored = await test_client.get(f"/thoughts/{created_thought['id']}")
        assert stored.json()["message"] == "Berlin baby"

    @pytest.mark.asyncio
    async def test_update_unknown_id_is_404(self, test_client):
        response = await test_client.put(f"/thoughts/{uuid4()}", json={"message": "Hello world"})
        assert response.status_code == 404


class TestDeleteThought:

    @pytest.mark.asyncio
    async def test_delete_returns_deleted_thought(self, test_client, created_thought):
        response = await test_client.delete(f"/thoughts/{created_thought['id']}")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Thought deleted successfully"
        assert body["deletedThought"]["id"] == created_thought["id"]
        assert body["deletedThought"]["message"] == "Berlin baby"

    @pytest.mark.asyncio
    async def test_get_after_delete_is_404(self, test_client, created_thought):
        await test_client.delete(f"/thoughts/{created_thought['id']}")

        response = await test_client.get(f"/thoughts/{created_thought['id']}")
        assert response.status_code == 404

        again = await test_client.delete(f"/thoughts/{created_thought['id']}")
        assert again.status_code == 404


class TestMalformedId:
    """A malformed id is a 400, never confused with a 404."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method, path, body",
        [
            ("GET", "/thoughts/not-an-id", None),
            ("POST", "/thoughts/not-an-id/like", None),
            ("PUT", "/thoughts/not-an-id", {"message": "Hello world"}),
            ("DELETE", "/thoughts/not-an-id", None),
        ],
    )
    async def test_malformed_id(self, test_client, method, path, body):
        response = await test_client.request(method, path, json=body)

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid thought ID"
        assert "not-an-id" in response.json()["message"]
