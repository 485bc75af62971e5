"""
Wardrobe Backend — Comment API Tests
=====================================

What we test:
    ✅ Creating a comment needs a token and records the author
    ✅ A comment needs text or the damaged flag
    ✅ garment_id validation (400) and existence (404)
    ✅ Update check order: id formats → comment → garment → fields
    ✅ An update cannot leave a comment with neither text nor the damaged flag
    ✅ Delete, list, list by garment
"""

import pytest
import pytest_asyncio

from conftest import JPEG_BYTES


@pytest_asyncio.fixture
async def garment_id(upload_garment):
    response = await upload_garment("kilt.jpg", "image", JPEG_BYTES)
    assert response.status_code == 201
    return int(response.headers["Location"].rsplit("/", 1)[-1])


async def _comment(client, auth_headers, **body):
    return await client.post("/comments", json=body, headers=auth_headers)


class TestCommentCreate:

    @pytest.mark.asyncio
    async def test_requires_token(self, client, garment_id):
        response = await client.post("/comments", json={"garment_id": garment_id, "text": "torn"})
        assert response.status_code == 401
        assert "message" in response.json()

    @pytest.mark.asyncio
    async def test_create_records_author(self, client, auth_headers, registered_user, garment_id):
        response = await _comment(client, auth_headers, garment_id=garment_id, text="button missing")

        assert response.status_code == 201
        location = response.headers["Location"]
        assert location.startswith("http://test/comments/")

        comment = (await client.get(location.replace("http://test", ""))).json()
        user = (await client.get(f"/users/{registered_user['username']}")).json()
        assert comment["text"] == "button missing"
        assert comment["garment_id"] == garment_id
        assert comment["author_id"] == user["id"]
        assert comment["damaged"] is False

    @pytest.mark.asyncio
    async def test_damaged_flag_alone_is_enough(self, client, auth_headers, garment_id):
        response = await _comment(client, auth_headers, garment_id=garment_id, damaged=True)
        assert response.status_code == 201

    @pytest.mark.asyncio
    async def test_string_garment_id_accepted(self, client, auth_headers, garment_id):
        response = await _comment(client, auth_headers, garment_id=str(garment_id), text="ok")
        assert response.status_code == 201

    @pytest.mark.asyncio
    async def test_needs_text_or_damaged(self, client, auth_headers, garment_id):
        response = await _comment(client, auth_headers, garment_id=garment_id, damaged=False)
        assert response.status_code == 400

        response = await _comment(client, auth_headers, garment_id=garment_id, text="   ")
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_garment_id_validation(self, client, auth_headers):
        assert (await _comment(client, auth_headers, text="x")).status_code == 400
        assert (await _comment(client, auth_headers, garment_id="abc", text="x")).status_code == 400
        assert (await _comment(client, auth_headers, garment_id=999, text="x")).status_code == 404


class TestCommentRead:

    @pytest.mark.asyncio
    async def test_empty_lists_are_200(self, client, garment_id):
        assert (await client.get("/comments")).json() == []

        response = await client.get(f"/comments/garment/{garment_id}")
        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_list_by_garment(self, client, auth_headers, garment_id, upload_garment):
        other = await upload_garment("vest.jpg", "image", JPEG_BYTES)
        other_id = int(other.headers["Location"].rsplit("/", 1)[-1])
        await _comment(client, auth_headers, garment_id=garment_id, text="first")
        await _comment(client, auth_headers, garment_id=other_id, text="elsewhere")
        await _comment(client, auth_headers, garment_id=garment_id, text="second")

        response = await client.get(f"/comments/garment/{garment_id}")

        assert [c["text"] for c in response.json()] == ["first", "second"]
        assert len((await client.get("/comments")).json()) == 3

    @pytest.mark.asyncio
    async def test_ids_validated(self, client):
        assert (await client.get("/comments/abc")).status_code == 400
        assert (await client.get("/comments/999")).status_code == 404
        assert (await client.get("/comments/garment/abc")).status_code == 400
        assert (await client.get("/comments/garment/999")).status_code == 404


class TestCommentUpdate:

    @pytest.mark.asyncio
    async def test_update_text(self, client, auth_headers, garment_id):
        created = await _comment(client, auth_headers, garment_id=garment_id, text="torn")
        comment_id = created.headers["Location"].rsplit("/", 1)[-1]

        response = await client.put(f"/comments/{comment_id}", json={"text": "repaired", "damaged": False})
        assert response.status_code == 204

        comment = (await client.get(f"/comments/{comment_id}")).json()
        assert comment["text"] == "repaired"

    @pytest.mark.asyncio
    async def test_move_to_another_garment(self, client, auth_headers, garment_id, upload_garment):
        other = await upload_garment("vest.jpg", "image", JPEG_BYTES)
        other_id = int(other.headers["Location"].rsplit("/", 1)[-1])
        created = await _comment(client, auth_headers, garment_id=garment_id, text="torn")
        comment_id = created.headers["Location"].rsplit("/", 1)[-1]

        response = await client.put(f"/comments/{comment_id}", json={"garment_id": other_id})
        assert response.status_code == 204
        assert (await client.get(f"/comments/{comment_id}")).json()["garment_id"] == other_id

    @pytest.mark.asyncio
    async def test_id_formats_checked_before_existence(self, client):
        assert (await client.put("/comments/abc", json={"text": "x"})).status_code == 400
        assert (await client.put("/comments/999", json={"garment_id": "x"})).status_code == 400

    @pytest.mark.asyncio
    async def test_missing_comment_then_missing_garment(self, client, auth_headers, garment_id):
        response = await client.put("/comments/999", json={"garment_id": 998})
        assert response.status_code == 404
        assert "Comment" in response.json()["message"]

        created = await _comment(client, auth_headers, garment_id=garment_id, text="torn")
        comment_id = created.headers["Location"].rsplit("/", 1)[-1]
        response = await client.put(f"/comments/{comment_id}", json={"garment_id": 998})
        assert response.status_code == 404
        assert "Garment" in response.json()["message"]

    @pytest.mark.asyncio
    async def test_empty_update_is_400(self, client, auth_headers, garment_id):
        created = await _comment(client, auth_headers, garment_id=garment_id, text="torn")
        comment_id = created.headers["Location"].rsplit("/", 1)[-1]

        assert (await client.put(f"/comments/{comment_id}", json={})).status_code == 400

    @pytest.mark.asyncio
    async def test_update_cannot_strip_text_from_undamaged_comment(self, client, auth_headers, garment_id):
        created = await _comment(client, auth_headers, garment_id=garment_id, text="torn")
        comment_id = created.headers["Location"].rsplit("/", 1)[-1]

        assert (await client.put(f"/comments/{comment_id}", json={"text": None})).status_code == 400
        response = await client.put(f"/comments/{comment_id}", json={"text": "", "damaged": False})
        assert response.status_code == 400

        comment = (await client.get(f"/comments/{comment_id}")).json()
        assert comment["text"] == "torn"

    @pytest.mark.asyncio
    async def test_damaged_comment_may_drop_text(self, client, auth_headers, garment_id):
        created = await _comment(client, auth_headers, garment_id=garment_id, text="torn", damaged=True)
        comment_id = created.headers["Location"].rsplit("/", 1)[-1]

        assert (await client.put(f"/comments/{comment_id}", json={"text": None})).status_code == 204
        assert (await client.put(f"/comments/{comment_id}", json={"damaged": False})).status_code == 400

    @pytest.mark.asyncio
    async def test_id_beyond_column_range_is_404(self, client, auth_headers):
        huge = "9" * 25
        assert (await client.get(f"/comments/{huge}")).status_code == 404
        assert (await client.put(f"/comments/{huge}", json={"text": "x"})).status_code == 404
        assert (await client.delete(f"/comments/{huge}")).status_code == 404
        assert (await _comment(client, auth_headers, garment_id=huge, text="x")).status_code == 404


class TestCommentDelete:

    @pytest.mark.asyncio
    async def test_delete(self, client, auth_headers, garment_id):
        created = await _comment(client, auth_headers, garment_id=garment_id, text="torn")
        comment_id = created.headers["Location"].rsplit("/", 1)[-1]

        assert (await client.delete(f"/comments/{comment_id}")).status_code == 204
        assert (await client.delete(f"/comments/{comment_id}")).status_code == 404
        assert (await client.delete("/comments/abc")).status_code == 400
