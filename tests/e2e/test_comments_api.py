"""End-to-end tests for the comment API.

Requests go through the full FastAPI stack, backed by the in-memory
repositories of the test container.
"""

from uuid import uuid4

import httpx
import pytest
import pytest_asyncio

from banter.config import Settings
from banter.domain.error import ConflictError
from banter.domain.repository import (
    CommentRepository,
    PostRepository,
    UserRepository,
)
from banter.interface.api.app import create_app
from tests.conftest import make_post, make_token, make_user
from tests.di import build_test_container


@pytest_asyncio.fixture
async def container():
    """Test container shared by the app and the test."""
    container = build_test_container()
    yield container
    await container.close()


@pytest_asyncio.fixture
async def api(container):
    """Yield an HTTP client, the signed-in users and a post to comment on."""
    app_instance = create_app(container)

    user_repo = await container.get(UserRepository)
    post_repo = await container.get(PostRepository)
    poster = await user_repo.save(make_user("poster"))
    rahim = await user_repo.save(make_user("rahim"))
    post = await post_repo.save(make_post(author_id=poster.id))

    transport = httpx.ASGITransport(app=app_instance)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client, {"poster": poster, "rahim": rahim}, post


def auth(user) -> dict[str, str]:
    """Cookie header for a signed-in user."""
    token = make_token(str(user.id), user.username.root, Settings().auth)
    return {"Cookie": f"auth_token={token}"}


class TestCommentEndpoints:
    """End-to-end tests for comment API endpoints.

    Note: These tests focus on the HTTP API interface layer.
    More detailed business logic tests are in unit tests.
    """

    @pytest.mark.asyncio
    async def test_create_comment_without_auth_fails(self, api):
        client, _, post = api

        response = await client.post(f"/posts/{post.id}/comments", json={"text": "hi"})

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_create_comment_with_invalid_token_fails(self, api):
        client, _, post = api

        response = await client.post(
            f"/posts/{post.id}/comments",
            json={"text": "hi"},
            headers={"Cookie": "auth_token=invalid-token"},
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_comment_thread_flow(self, api):
        """Comment, reply, like and list a post's comments."""
        client, users, post = api

        # Act - comment and reply
        created = await client.post(
            f"/posts/{post.id}/comments",
            json={"text": "Great post @poster"},
            headers=auth(users["rahim"]),
        )
        assert created.status_code == 201
        comment = created.json()["comment"]
        assert comment["mentions"] == ["poster"]
        assert comment["author"]["username"] == "rahim"

        reply = await client.post(
            f"/posts/{post.id}/comments",
            json={"text": "Thanks!", "parent_id": comment["comment_id"]},
            headers=auth(users["poster"]),
        )
        assert reply.status_code == 201
        assert reply.json()["notifications_sent"] == 1

        liked = await client.post(
            f"/comments/{comment['comment_id']}/like", headers=auth(users["poster"])
        )
        assert liked.json() == {
            "comment_id": comment["comment_id"],
            "liked": True,
            "likes_count": 1,
        }

        # Assert - listing as the liker
        listing = await client.get(
            f"/posts/{post.id}/comments", headers=auth(users["poster"])
        )
        assert listing.status_code == 200
        [item] = listing.json()["comments"]
        assert item["comment_id"] == comment["comment_id"]
        assert item["liked"] is True
        assert item["replies_count"] == 1
        assert [r["text"] for r in item["replies"]] == ["Thanks!"]

        replies = await client.get(f"/comments/{comment['comment_id']}/replies")
        assert [r["text"] for r in replies.json()["replies"]] == ["Thanks!"]

    @pytest.mark.asyncio
    async def test_comment_on_missing_post(self, api):
        client, users, _ = api

        response = await client.post(
            f"/posts/{uuid4()}/comments",
            json={"text": "hello?"},
            headers=auth(users["rahim"]),
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_empty_comment_rejected(self, api):
        client, users, post = api

        response = await client.post(
            f"/posts/{post.id}/comments",
            json={"text": "   "},
            headers=auth(users["rahim"]),
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_edit_by_other_user_forbidden(self, api):
        client, users, post = api
        created = await client.post(
            f"/posts/{post.id}/comments",
            json={"text": "mine"},
            headers=auth(users["rahim"]),
        )
        comment_id = created.json()["comment"]["comment_id"]

        response = await client.patch(
            f"/comments/{comment_id}",
            json={"text": "not yours"},
            headers=auth(users["poster"]),
        )

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_edit_deleted_comment_conflicts(self, api):
        client, users, post = api
        created = await client.post(
            f"/posts/{post.id}/comments",
            json={"text": "soon gone"},
            headers=auth(users["rahim"]),
        )
        comment_id = created.json()["comment"]["comment_id"]

        deleted = await client.delete(
            f"/comments/{comment_id}", headers=auth(users["rahim"])
        )
        edited = await client.patch(
            f"/comments/{comment_id}",
            json={"text": "too late"},
            headers=auth(users["rahim"]),
        )

        assert deleted.status_code == 200
        assert edited.status_code == 409

    @pytest.mark.asyncio
    async def test_reaction_and_report(self, api):
        client, users, post = api
        created = await client.post(
            f"/posts/{post.id}/comments",
            json={"text": "react to me"},
            headers=auth(users["poster"]),
        )
        comment_id = created.json()["comment"]["comment_id"]

        reacted = await client.put(
            f"/comments/{comment_id}/reaction",
            json={"emoji": "🎉"},
            headers=auth(users["rahim"]),
        )
        cleared = await client.delete(
            f"/comments/{comment_id}/reaction", headers=auth(users["rahim"])
        )
        reported = await client.post(
            f"/comments/{comment_id}/report",
            json={"reason": "spam"},
            headers=auth(users["rahim"]),
        )
        bad_report = await client.post(
            f"/comments/{comment_id}/report",
            json={"reason": "dislike"},
            headers=auth(users["rahim"]),
        )

        assert reacted.json()["my_reaction"] == "🎉"
        assert cleared.json()["reactions_count"] == 0
        assert reported.json()["report_count"] == 1
        assert bad_report.status_code == 400

    @pytest.mark.asyncio
    async def test_pin_by_post_author(self, api):
        client, users, post = api
        created = await client.post(
            f"/posts/{post.id}/comments",
            json={"text": "pin me"},
            headers=auth(users["rahim"]),
        )
        comment_id = created.json()["comment"]["comment_id"]

        response = await client.put(
            f"/comments/{comment_id}/pin",
            json={"pinned": True},
            headers=auth(users["poster"]),
        )

        assert response.status_code == 200
        assert response.json()["is_pinned"] is True

    @pytest.mark.asyncio
    async def test_search_and_user_comments(self, api):
        client, users, post = api
        for text in ("Cricket tonight", "Football tomorrow"):
            await client.post(
                f"/posts/{post.id}/comments",
                json={"text": text},
                headers=auth(users["rahim"]),
            )

        search = await client.get("/comments/search", params={"q": "cricket"})
        empty_search = await client.get("/comments/search", params={"q": ""})
        by_user = await client.get(f"/users/{users['rahim'].id}/comments")

        assert [c["text"] for c in search.json()["comments"]] == ["Cricket tonight"]
        assert empty_search.status_code == 400
        assert len(by_user.json()["comments"]) == 2

    @pytest.mark.asyncio
    async def test_malformed_comment_id(self, api):
        client, users, _ = api

        response = await client.post(
            "/comments/not-a-uuid/like", headers=auth(users["rahim"])
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_health(self, api):
        client, _, _ = api

        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    @pytest.mark.asyncio
    async def test_mentioned_comment_hidden_after_reports(self, api, container):
        """A mention resolves to its user; five reports hide the comment."""
        client, users, post = api
        user_repo = await container.get(UserRepository)
        readers = [await user_repo.save(make_user(f"reader_{i}")) for i in range(5)]

        created = await client.post(
            f"/posts/{post.id}/comments",
            json={"text": "Hello @rahim"},
            headers=auth(users["poster"]),
        )
        comment = created.json()["comment"]
        assert comment["mentions"] == ["rahim"]
        assert [u["user_id"] for u in comment["mentioned_users"]] == [
            str(users["rahim"].id)
        ]

        reports = [
            await client.post(
                f"/comments/{comment['comment_id']}/report",
                json={"reason": "harassment"},
                headers=auth(reader),
            )
            for reader in readers
        ]

        assert [r.json()["status"] for r in reports] == ["active"] * 4 + ["hidden"]
        assert reports[-1].json()["report_count"] == 5
        listing = await client.get(f"/posts/{post.id}/comments")
        assert listing.status_code == 200
        assert listing.json()["comments"] == []

    @pytest.mark.asyncio
    async def test_rejected_reply_is_not_kept(self, api, container, monkeypatch):
        """A reply whose parent cannot be updated is rolled back with the 409."""
        client, users, post = api
        created = await client.post(
            f"/posts/{post.id}/comments",
            json={"text": "parent"},
            headers=auth(users["poster"]),
        )
        parent_id = created.json()["comment"]["comment_id"]

        repo = await container.get(CommentRepository)
        original_update = repo.update

        async def update(comment):
            if str(comment.id) == parent_id:
                raise ConflictError("Comment", parent_id, comment.version)
            return await original_update(comment)

        monkeypatch.setattr(repo, "update", update)

        reply = await client.post(
            f"/posts/{post.id}/comments",
            json={"text": "lost reply", "parent_id": parent_id},
            headers=auth(users["rahim"]),
        )

        assert reply.status_code == 409
        replies = await client.get(f"/comments/{parent_id}/replies")
        assert replies.json()["replies"] == []
        by_user = await client.get(f"/users/{users['rahim'].id}/comments")
        assert by_user.json()["comments"] == []

    @pytest.mark.asyncio
    async def test_listings_carry_post_and_mentions(self, api):
        client, users, post = api
        await client.post(
            f"/posts/{post.id}/comments",
            json={"text": "Cricket with @poster and @nobody_here"},
            headers=auth(users["rahim"]),
        )

        search = await client.get("/comments/search", params={"q": "cricket"})
        by_user = await client.get(f"/users/{users['rahim'].id}/comments")

        for response in (search, by_user):
            [item] = response.json()["comments"]
            assert item["post"]["post_id"] == str(post.id)
            assert item["post"]["text"] == post.text
            assert item["post"]["author"]["username"] == "poster"
            assert item["mentions"] == ["poster", "nobody_here"]
            assert [u["username"] for u in item["mentioned_users"]] == ["poster"]

    @pytest.mark.asyncio
    async def test_zero_page_size_rejected(self, api):
        client, _, post = api

        listing = await client.get(
            f"/posts/{post.id}/comments", params={"page_size": 0}
        )
        search = await client.get("/comments/search", params={"q": "x", "limit": 0})

        assert listing.status_code == 400
        assert search.status_code == 400
