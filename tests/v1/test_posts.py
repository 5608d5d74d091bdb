# mypy: ignore-errors
# tests/v1/test_posts.py
"""Tests for post-related endpoints."""

from fastapi import status

from loop_forum.core.settings import settings
from loop_forum.models import Bookmark, Post, PostUpvote, Reply


def test_create_post_with_explicit_category(client, auth_token, categories) -> None:
    response = client.post(
        "/api/v1/posts/",
        json={
            "title": "My favourite films",
            "content": "Nothing about keywords in here at all, honestly.",
            "category_id": categories["news"].id,
        },
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["category_slug"] == "news"
    assert data["username"] == "alice"
    assert data["upvotes"] == 0
    assert data["reply_count"] == 0


def test_create_post_auto_categorizes(client, auth_token) -> None:
    response = client.post(
        "/api/v1/posts/",
        json={
            "title": "Is Rust worth learning",
            "content": "Thinking about programming in it instead of javascript.",
        },
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["category_slug"] == "technology"


def test_create_post_without_keywords_goes_to_general(client, auth_token) -> None:
    response = client.post(
        "/api/v1/posts/",
        json={"title": "Hello there", "content": "Just saying hello to everyone here."},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["category_slug"] == "general"


def test_create_post_short_title(client, auth_token) -> None:
    response = client.post(
        "/api/v1/posts/",
        json={"title": "Hi", "content": "This content is certainly long enough."},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["code"] == "validation_error"


def test_create_post_short_content(client, auth_token) -> None:
    response = client.post(
        "/api/v1/posts/",
        json={"title": "A proper title", "content": "Too short"},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_create_post_unknown_category(client, auth_token) -> None:
    response = client.post(
        "/api/v1/posts/",
        json={
            "title": "A proper title",
            "content": "This content is certainly long enough.",
            "category_id": 9999,
        },
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_create_post_requires_auth(client) -> None:
    response = client.post(
        "/api/v1/posts/",
        json={"title": "A proper title", "content": "This content is certainly long enough."},
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_list_posts_newest_first(client, make_post, test_user) -> None:
    first = make_post(test_user, title="First post")
    second = make_post(test_user, title="Second post")

    response = client.get("/api/v1/posts/")
    assert response.status_code == status.HTTP_200_OK
    ids = [item["id"] for item in response.json()]
    assert ids == [second.id, first.id]


def test_list_posts_sorted_by_upvotes(client, make_post, test_user) -> None:
    low = make_post(test_user, title="Low post", upvotes=1)
    high = make_post(test_user, title="High post", upvotes=5)
    newest = make_post(test_user, title="Newest post", upvotes=0)

    response = client.get("/api/v1/posts/", params={"sort": "upvotes"})
    ids = [item["id"] for item in response.json()]
    assert ids == [high.id, low.id, newest.id]


def test_list_posts_filter_by_category(client, make_post, test_user) -> None:
    travel = make_post(test_user, category="travel")
    make_post(test_user, category="movie")

    response = client.get("/api/v1/posts/", params={"category": "travel"})
    assert [item["id"] for item in response.json()] == [travel.id]


def test_list_posts_unknown_category(client) -> None:
    response = client.get("/api/v1/posts/", params={"category": "cooking"})
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_list_posts_pagination(client, make_post, test_user) -> None:
    posts = [make_post(test_user, title=f"Post number {i}") for i in range(5)]

    response = client.get("/api/v1/posts/", params={"limit": 2, "offset": 1})
    ids = [item["id"] for item in response.json()]
    assert ids == [posts[3].id, posts[2].id]


def test_list_posts_rejects_oversized_page(client) -> None:
    response = client.get("/api/v1/posts/", params={"limit": 10_000})
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_list_posts_includes_reply_count(client, test_post, make_reply, other_user) -> None:
    root = make_reply(other_user, test_post)
    make_reply(other_user, test_post, parent=root)

    response = client.get("/api/v1/posts/")
    assert response.json()[0]["reply_count"] == 2


def test_list_posts_anonymous_flags_false(client, test_post, other_auth_token) -> None:
    client.post(f"/api/v1/posts/{test_post.id}/upvote", headers=other_auth_token)

    item = client.get("/api/v1/posts/").json()[0]
    assert item["upvotes"] == 1
    assert item["has_upvoted"] is False
    assert item["is_bookmarked"] is False
    assert item["is_following"] is False


def test_list_posts_viewer_flags(client, test_post, test_user, other_auth_token) -> None:
    client.post(f"/api/v1/posts/{test_post.id}/upvote", headers=other_auth_token)
    client.post(f"/api/v1/bookmarks/{test_post.id}", headers=other_auth_token)
    client.post(f"/api/v1/follows/{test_user.id}", headers=other_auth_token)

    item = client.get("/api/v1/posts/", headers=other_auth_token).json()[0]
    assert item["has_upvoted"] is True
    assert item["is_bookmarked"] is True
    assert item["is_following"] is True


def test_list_posts_ignores_bad_token(client, test_post) -> None:
    response = client.get("/api/v1/posts/", headers={"Authorization": "Bearer stale"})
    assert response.status_code == status.HTTP_200_OK
    assert len(response.json()) == 1


def test_top_posts_per_category(client, make_post, test_user) -> None:
    travel = [make_post(test_user, category="travel", upvotes=n) for n in range(5)]

    response = client.get("/api/v1/posts/top")
    assert response.status_code == status.HTTP_200_OK
    groups = response.json()
    assert groups["travel"]["category"]["slug"] == "travel"
    assert [p["id"] for p in groups["travel"]["posts"]] == [
        travel[4].id,
        travel[3].id,
        travel[2].id,
    ]
    assert groups["news"]["posts"] == []


def test_get_post_detail(client, test_post, make_reply, other_user) -> None:
    root = make_reply(other_user, test_post, content="Top level")
    child = make_reply(other_user, test_post, content="Nested", parent=root)

    response = client.get(f"/api/v1/posts/{test_post.id}")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["id"] == test_post.id
    assert data["reply_count"] == 2
    assert len(data["replies"]) == 1
    assert data["replies"][0]["id"] == root.id
    assert data["replies"][0]["children"][0]["id"] == child.id
    assert data["replies"][0]["children"][0]["depth"] == 1


def test_get_post_detail_reply_sort(client, test_post, make_reply, other_user) -> None:
    popular = make_reply(other_user, test_post, content="Popular", upvotes=3)
    recent = make_reply(other_user, test_post, content="Recent", upvotes=0)

    by_votes = client.get(f"/api/v1/posts/{test_post.id}").json()["replies"]
    assert [r["id"] for r in by_votes] == [popular.id, recent.id]

    by_time = client.get(f"/api/v1/posts/{test_post.id}", params={"sort": "newest"}).json()["replies"]
    assert [r["id"] for r in by_time] == [recent.id, popular.id]


def test_get_missing_post(client) -> None:
    response = client.get("/api/v1/posts/424242")
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_delete_post_cascades(
    client,
    db_session,
    test_post,
    auth_token,
    other_auth_token,
    make_reply,
    other_user,
) -> None:
    root = make_reply(other_user, test_post)
    make_reply(other_user, test_post, parent=root)
    client.post(f"/api/v1/posts/{test_post.id}/upvote", headers=other_auth_token)
    client.post(f"/api/v1/bookmarks/{test_post.id}", headers=other_auth_token)

    response = client.delete(f"/api/v1/posts/{test_post.id}", headers=auth_token)
    assert response.status_code == status.HTTP_204_NO_CONTENT

    assert db_session.query(Post).filter(Post.id == test_post.id).count() == 0
    assert db_session.query(Reply).filter(Reply.post_id == test_post.id).count() == 0
    assert db_session.query(PostUpvote).filter(PostUpvote.post_id == test_post.id).count() == 0
    assert db_session.query(Bookmark).filter(Bookmark.post_id == test_post.id).count() == 0


def test_delete_post_by_non_author(client, test_post, other_auth_token) -> None:
    response = client.delete(f"/api/v1/posts/{test_post.id}", headers=other_auth_token)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["code"] == "invalid_operation"


def test_get_post_detail_with_very_deep_thread(client, test_post, make_reply, other_user) -> None:
    parent = None
    for _ in range(400):
        parent = make_reply(other_user, test_post, parent=parent)

    response = client.get(f"/api/v1/posts/{test_post.id}")
    assert response.status_code == status.HTTP_200_OK

    data = response.json()
    assert data["reply_count"] == 400
    node = data["replies"][0]
    nesting = 0
    while len(node["children"]) == 1:
        node = node["children"][0]
        nesting += 1
    assert nesting == settings.max_thread_depth
    assert len(node["children"]) == 400 - settings.max_thread_depth - 1
    assert node["children"][-1]["depth"] == 399
    assert node["children"][-1]["id"] == parent.id
