"""Public submission and owner review of feedback."""
import uuid
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import func, select

from feedback_wall.models import Feedback
from feedback_wall.services.feedback import with_ordinals


class TestPublicPage:
    @pytest.mark.asyncio
    async def test_active_page_visible_without_login(self, client, create_page, alice_headers):
        await create_page(alice_headers, "Product Ideas", description="What should we build next?")

        response = await client.get("/api/v1/public/pages/product-ideas")
        assert response.status_code == 200
        data = response.json()
        assert data == {
            "title": "Product Ideas",
            "description": "What should we build next?",
            "slug": "product-ideas",
        }

    @pytest.mark.asyncio
    async def test_unknown_and_inactive_pages_look_the_same(self, client, create_page, alice_headers):
        page = await create_page(alice_headers, "Closed Box")
        await client.patch(f"/api/v1/pages/{page['id']}", json={"is_active": False}, headers=alice_headers)

        missing = await client.get("/api/v1/public/pages/never-existed")
        inactive = await client.get("/api/v1/public/pages/closed-box")
        assert missing.status_code == inactive.status_code == 404
        assert missing.json() == inactive.json()

    @pytest.mark.asyncio
    async def test_owner_gets_not_found_for_own_inactive_page(self, client, create_page, alice_headers):
        page = await create_page(alice_headers, "Paused")
        await client.patch(f"/api/v1/pages/{page['id']}", json={"is_active": False}, headers=alice_headers)

        response = await client.get("/api/v1/public/pages/paused", headers=alice_headers)
        assert response.status_code == 404


class TestSubmitFeedback:
    @pytest.mark.asyncio
    async def test_round_trip_keeps_no_submitter_identity(
        self, client, create_page, alice_headers, bob_headers
    ):
        page = await create_page(alice_headers, "Launch")

        # Submitted by a signed-in user; still nothing about them is kept
        response = await client.post(
            "/api/v1/public/pages/launch/feedback",
            json={"message": "Great product!"},
            headers=bob_headers,
        )
        assert response.status_code == 201
        assert "id" not in response.json()

        response = await client.get(f"/api/v1/pages/{page['id']}/feedback", headers=alice_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        [item] = data["items"]
        assert item["message"] == "Great product!"
        assert item["ordinal"] == 1
        assert set(item) == {"id", "ordinal", "message", "created_at"}

        columns = set(Feedback.__table__.columns.keys())
        assert columns == {"id", "message", "feedback_page_id", "created_at", "updated_at"}

    @pytest.mark.asyncio
    async def test_message_is_stored_trimmed(self, client, create_page, alice_headers, db):
        await create_page(alice_headers, "Trim")
        response = await client.post("/api/v1/public/pages/trim/feedback", json={"message": "  hello  \n"})
        assert response.status_code == 201

        stored = (await db.execute(select(Feedback.message))).scalar_one()
        assert stored == "hello"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("message", ["", "   ", "\n\t  "])
    async def test_blank_message_rejected_before_store(self, client, create_page, alice_headers, db, message):
        await create_page(alice_headers, "Blank Check")

        response = await client.post("/api/v1/public/pages/blank-check/feedback", json={"message": message})
        assert response.status_code == 422
        assert (await db.execute(select(func.count(Feedback.id)))).scalar() == 0

    @pytest.mark.asyncio
    async def test_inactive_or_missing_page_creates_nothing(self, client, create_page, alice_headers, db):
        page = await create_page(alice_headers, "Gone Quiet")
        await client.patch(f"/api/v1/pages/{page['id']}", json={"is_active": False}, headers=alice_headers)

        for slug in ("gone-quiet", "no-such-page"):
            response = await client.post(f"/api/v1/public/pages/{slug}/feedback", json={"message": "hi"})
            assert response.status_code == 404

        assert (await db.execute(select(func.count(Feedback.id)))).scalar() == 0

    @pytest.mark.asyncio
    async def test_no_duplicate_suppression(self, client, create_page, alice_headers, db):
        await create_page(alice_headers, "Open Mic")
        for _ in range(3):
            response = await client.post("/api/v1/public/pages/open-mic/feedback", json={"message": "same"})
            assert response.status_code == 201

        assert (await db.execute(select(func.count(Feedback.id)))).scalar() == 3


class TestReviewFeedback:
    @pytest.mark.asyncio
    async def test_newest_first_with_descending_ordinals(self, client, create_page, alice_headers, db):
        page = await create_page(alice_headers, "Ordered")
        base = datetime(2026, 1, 1, tzinfo=timezone.utc)
        for minutes, text in [(0, "oldest"), (10, "middle"), (20, "newest")]:
            db.add(
                Feedback(
                    message=text,
                    feedback_page_id=uuid.UUID(page["id"]),
                    created_at=base + timedelta(minutes=minutes),
                )
            )
        await db.commit()

        response = await client.get(f"/api/v1/pages/{page['id']}/feedback", headers=alice_headers)
        data = response.json()
        assert data["total"] == 3
        assert [(i["ordinal"], i["message"]) for i in data["items"]] == [
            (3, "newest"),
            (2, "middle"),
            (1, "oldest"),
        ]
        assert data["page"]["public_url"] == "http://example.test/feedback/ordered"

    @pytest.mark.asyncio
    async def test_feedback_hidden_while_page_inactive(self, client, create_page, alice_headers):
        page = await create_page(alice_headers, "Archive")
        await client.post("/api/v1/public/pages/archive/feedback", json={"message": "kept"})
        await client.patch(f"/api/v1/pages/{page['id']}", json={"is_active": False}, headers=alice_headers)

        response = await client.get(f"/api/v1/pages/{page['id']}/feedback", headers=alice_headers)
        assert response.status_code == 200
        assert response.json()["items"] == []
        assert response.json()["total"] == 0

        # Reactivating brings the stored rows back
        await client.patch(f"/api/v1/pages/{page['id']}", json={"is_active": True}, headers=alice_headers)
        response = await client.get(f"/api/v1/pages/{page['id']}/feedback", headers=alice_headers)
        assert [i["message"] for i in response.json()["items"]] == ["kept"]

    @pytest.mark.asyncio
    async def test_unknown_page_is_not_found(self, client, alice_headers):
        response = await client.get(f"/api/v1/pages/{uuid.uuid4()}/feedback", headers=alice_headers)
        assert response.status_code == 404
        assert response.json()["detail"] == "Feedback page not found"

    @pytest.mark.asyncio
    async def test_requires_authentication(self, client, create_page, alice_headers):
        page = await create_page(alice_headers, "Locked")
        response = await client.get(f"/api/v1/pages/{page['id']}/feedback")
        assert response.status_code == 401


class TestOrdinals:
    def test_labels(self):
        items = ["c", "b", "a"]
        assert with_ordinals(items) == [(3, "c"), (2, "b"), (1, "a")]

    def test_empty(self):
        assert with_ordinals([]) == []
