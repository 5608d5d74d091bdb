# mypy: ignore-errors
# tests/v1/test_categories.py
"""Tests for category endpoints."""

from fastapi import status

from loop_forum.db.seed import DEFAULT_CATEGORIES, seed_categories


def test_list_categories_with_counts(client, make_post, test_user) -> None:
    make_post(test_user, category="travel")
    make_post(test_user, category="travel")
    make_post(test_user, category="news")

    response = client.get("/api/v1/categories/")
    assert response.status_code == status.HTTP_200_OK
    counts = {item["slug"]: item["post_count"] for item in response.json()}
    assert set(counts) == {entry["slug"] for entry in DEFAULT_CATEGORIES}
    assert counts["travel"] == 2
    assert counts["news"] == 1
    assert counts["general"] == 0


def test_get_category_by_slug(client) -> None:
    response = client.get("/api/v1/categories/technology")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["name"] == "Technology"


def test_get_unknown_category(client) -> None:
    response = client.get("/api/v1/categories/cooking")
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_seeding_is_idempotent(db_session) -> None:
    assert seed_categories(db_session) == 0
