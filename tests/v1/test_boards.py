# mypy: ignore-errors
# tests/v1/test_boards.py
"""Tests for board endpoints."""

from datetime import timedelta

from fastapi import status

from threadboard.core.security import Role

from conftest import AUTHOR_ID, OTHER_USER_ID


def test_create_and_get_board(client, auth_headers) -> None:
    """Test creating a board and fetching it back."""
    response = client.post(
        "/api/v1/boards/",
        json={"title": "Python", "description": "Snakes"},
        headers=auth_headers(),
    )
    assert response.status_code == status.HTTP_201_CREATED
    board = response.json()
    assert board["owner_id"] == AUTHOR_ID

    fetched = client.get(f"/api/v1/boards/{board['id']}").json()
    assert fetched["title"] == "Python"


def test_list_boards(client, board, other_board) -> None:
    """Test listing boards."""
    titles = [b["title"] for b in client.get("/api/v1/boards/").json()]
    assert titles == [board.title, other_board.title]


def test_get_missing_board(client) -> None:
    """Test fetching a board that does not exist."""
    response = client.get("/api/v1/boards/999")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"detail": "Board not found"}


def test_board_posts(client, board, other_board, make_post) -> None:
    """Test listing a board's posts newest first."""
    older = make_post(board, age=timedelta(hours=2))
    newer = make_post(board, age=timedelta(hours=1))
    make_post(other_board)

    posts = client.get(f"/api/v1/boards/{board.id}/posts").json()
    assert [p["id"] for p in posts] == [newer.id, older.id]


def test_follow_is_idempotent(client, auth_headers, board, make_post) -> None:
    """Test following twice and then unfollowing."""
    headers = auth_headers(OTHER_USER_ID)
    url = f"/api/v1/boards/{board.id}/follow"
    post = make_post(board)

    assert client.post(url, headers=headers).status_code == status.HTTP_201_CREATED
    assert client.post(url, headers=headers).json() == {"status": "following"}
    feed = client.get("/api/v1/feed/following", headers=headers).json()
    assert [p["id"] for p in feed] == [post.id]

    assert client.delete(url, headers=headers).status_code == status.HTTP_204_NO_CONTENT
    assert client.get("/api/v1/feed/following", headers=headers).json() == []


def test_follow_missing_board(client, auth_headers) -> None:
    """Test following a board that does not exist."""
    response = client.post("/api/v1/boards/999/follow", headers=auth_headers())
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_followed_boards(client, auth_headers, board, other_board, follow) -> None:
    """Test listing the boards the caller follows."""
    follow(OTHER_USER_ID, other_board)
    headers = auth_headers(OTHER_USER_ID)

    boards = client.get("/api/v1/boards/following", headers=headers).json()
    assert [b["id"] for b in boards] == [other_board.id]
    assert client.get("/api/v1/boards/following", headers=auth_headers(99)).json() == []


def test_my_boards(client, auth_headers, board, other_board) -> None:
    """Test listing the boards the caller owns."""
    mine = client.get("/api/v1/boards/myboards", headers=auth_headers(AUTHOR_ID)).json()
    assert [b["id"] for b in mine] == [board.id]

    theirs = client.get("/api/v1/boards/myboards", headers=auth_headers(OTHER_USER_ID)).json()
    assert [b["id"] for b in theirs] == [other_board.id]


def test_board_listings_require_auth(client) -> None:
    """Test personal board listings reject anonymous callers."""
    for listing in ("following", "myboards"):
        response = client.get(f"/api/v1/boards/{listing}")
        assert response.status_code in {status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN}


def test_owner_updates_board(client, auth_headers, board) -> None:
    """Test the owner can rename a board and omitted fields stay."""
    response = client.put(
        f"/api/v1/boards/{board.id}",
        json={"title": "Renamed"},
        headers=auth_headers(AUTHOR_ID),
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["title"] == "Renamed"
    assert data["description"] == "Anything goes"


def test_update_other_users_board(client, auth_headers, board) -> None:
    """Test editing someone else's board is forbidden."""
    response = client.put(
        f"/api/v1/boards/{board.id}",
        json={"title": "Mine now"},
        headers=auth_headers(OTHER_USER_ID),
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert client.get(f"/api/v1/boards/{board.id}").json()["title"] == "General"


def test_update_missing_board(client, auth_headers) -> None:
    """Test editing a board that does not exist."""
    response = client.put("/api/v1/boards/999", json={"title": "x"}, headers=auth_headers())
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_moderator_updates_board(client, auth_headers, board) -> None:
    """Test staff can edit any board."""
    response = client.put(
        f"/api/v1/boards/{board.id}",
        json={"description": "Moderated"},
        headers=auth_headers(OTHER_USER_ID, Role.MODERATOR),
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["description"] == "Moderated"


def test_owner_deletes_board(
    client, auth_headers, cache, board, other_board, make_post, follow
) -> None:
    """Test deleting a board removes its posts, follows and bookmarkers' cached lists."""
    reader = auth_headers(OTHER_USER_ID)
    board_id = board.id
    post_id = make_post(board).id
    kept_id = make_post(other_board).id
    follow(OTHER_USER_ID, board)
    client.post(f"/api/v1/bookmarks/{post_id}", headers=reader)
    cache.deleted.clear()

    response = client.delete(f"/api/v1/boards/{board_id}", headers=auth_headers(AUTHOR_ID))
    assert response.status_code == status.HTTP_204_NO_CONTENT

    assert client.get(f"/api/v1/boards/{board_id}").status_code == status.HTTP_404_NOT_FOUND
    assert client.get(f"/api/v1/posts/{post_id}").status_code == status.HTTP_404_NOT_FOUND
    assert client.get(f"/api/v1/posts/{kept_id}").status_code == status.HTTP_200_OK
    assert client.get("/api/v1/boards/following", headers=reader).json() == []
    assert cache.deleted == [f"bookmarks:user:{OTHER_USER_ID}"]
    assert client.get("/api/v1/feed/bookmarks", headers=reader).json() == []


def test_delete_other_users_board(client, auth_headers, board) -> None:
    """Test deleting someone else's board is forbidden."""
    response = client.delete(f"/api/v1/boards/{board.id}", headers=auth_headers(OTHER_USER_ID))
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json() == {"detail": "You can only delete your own boards"}
    assert client.get(f"/api/v1/boards/{board.id}").status_code == status.HTTP_200_OK
