"""
Hersteller Service — REST Endpoint Tests
==========================================

What:  Tests for /rest status codes, headers and HAL bodies, plus /health.
How:   httpx AsyncClient over ASGITransport against a fresh app per test.
"""

import uuid

import pytest

ALPHA = {"name": "Alpha", "telephone": "12345678901", "homepage": "https://acme.test/"}


async def _create(client, payload=None):
    response = await client.post("/rest", json=payload or ALPHA)
    assert response.status_code == 201
    return response.headers["Location"].rsplit("/", 1)[-1]


class TestCreateEndpoint:

    @pytest.mark.asyncio
    async def test_created_with_location(self, test_client):
        response = await test_client.post("/rest", json={**ALPHA, "schlagwoerter": ["JAVASCRIPT"]})

        assert response.status_code == 201
        location = response.headers["Location"]
        assert location.startswith("http://test/rest/")
        assert (await test_client.get(location)).status_code == 200

    @pytest.mark.asyncio
    async def test_constraint_violations_as_json_list(self, test_client):
        response = await test_client.post("/rest", json={"telephone": "1"})

        assert response.status_code == 422
        assert response.json() == [
            "A manufacturer name is required.",
            "A telephone number consists of exactly 11 digits.",
        ]

    @pytest.mark.asyncio
    async def test_duplicate_name_as_text(self, test_client):
        await _create(test_client)

        response = await test_client.post("/rest", json={"name": "Alpha"})

        assert response.status_code == 422
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == 'The name "Alpha" already exists.'

    @pytest.mark.asyncio
    async def test_overlong_values_rejected(self, test_client):
        response = await test_client.post(
            "/rest", json={"name": "A" * 41, "schlagwoerter": ["JAVASCRIPT", "X" * 17]}
        )

        assert response.status_code == 422
        assert response.json() == [
            "A manufacturer name has at most 40 characters.",
            "A keyword has at most 16 characters.",
        ]

    @pytest.mark.asyncio
    async def test_service_owned_fields_rejected(self, test_client):
        response = await test_client.post("/rest", json={**ALPHA, "version": 7})

        assert response.status_code == 422


class TestReadEndpoints:

    @pytest.mark.asyncio
    async def test_find_by_id_with_etag_and_links(self, test_client):
        id = await _create(test_client)

        response = await test_client.get(f"/rest/{id}")

        assert response.status_code == 200
        assert response.headers["ETag"] == '"0"'
        body = response.json()
        assert body["name"] == "Alpha"
        assert body["telephone"] == "12345678901"
        assert body["_links"] == {
            "self": {"href": f"http://test/rest/{id}"},
            "list": {"href": "http://test/rest"},
            "add": {"href": "http://test/rest"},
            "update": {"href": f"http://test/rest/{id}"},
            "remove": {"href": f"http://test/rest/{id}"},
        }

    @pytest.mark.asyncio
    async def test_not_modified_for_current_etag(self, test_client):
        id = await _create(test_client)

        response = await test_client.get(f"/rest/{id}", headers={"If-None-Match": '"0"'})

        assert response.status_code == 304
        assert response.content == b""

    @pytest.mark.asyncio
    async def test_outdated_etag_returns_body(self, test_client):
        id = await _create(test_client)
        await test_client.put(f"/rest/{id}", json=ALPHA, headers={"If-Match": '"0"'})

        response = await test_client.get(f"/rest/{id}", headers={"If-None-Match": '"0"'})

        assert response.status_code == 200
        assert response.headers["ETag"] == '"1"'

    @pytest.mark.asyncio
    async def test_find_by_id_not_found(self, test_client):
        response = await test_client.get(f"/rest/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_search_embeds_items_with_self_link(self, test_client):
        id = await _create(test_client)
        await _create(test_client, {"name": "Beta"})

        response = await test_client.get("/rest", params={"name": "alp"})

        assert response.status_code == 200
        items = response.json()["_embedded"]["herstellers"]
        assert items == [{
            "name": "Alpha",
            "telephone": "12345678901",
            "homepage": "https://acme.test/",
            "_links": {"self": {"href": f"http://test/rest/{id}"}},
        }]

    @pytest.mark.asyncio
    async def test_search_by_keyword(self, test_client):
        await _create(test_client, {"name": "Alpha", "schlagwoerter": ["TYPESCRIPT"]})
        await _create(test_client, {"name": "Beta"})

        response = await test_client.get("/rest", params={"typescript": "true"})

        names = [h["name"] for h in response.json()["_embedded"]["herstellers"]]
        assert names == ["Alpha"]

    @pytest.mark.asyncio
    async def test_search_without_match(self, test_client):
        await _create(test_client)

        assert (await test_client.get("/rest", params={"name": "Omega"})).status_code == 404

    @pytest.mark.asyncio
    async def test_search_by_version(self, test_client):
        await _create(test_client)

        response = await test_client.get("/rest", params={"version": "0"})

        assert response.status_code == 200
        assert [h["name"] for h in response.json()["_embedded"]["herstellers"]] == ["Alpha"]

    @pytest.mark.asyncio
    async def test_search_value_of_wrong_type_matches_nothing(self, test_client):
        await _create(test_client)

        assert (await test_client.get("/rest", params={"version": "abc"})).status_code == 404
        assert (await test_client.get("/rest", params={"created_at": "soon"})).status_code == 404

    @pytest.mark.asyncio
    async def test_name_wildcard_is_literal(self, test_client):
        await _create(test_client)

        assert (await test_client.get("/rest", params={"name": "_"})).status_code == 404

    @pytest.mark.asyncio
    async def test_unknown_query_parameter_matches_nothing(self, test_client):
        await _create(test_client)

        assert (await test_client.get("/rest", params={"bogus": "x"})).status_code == 404


class TestUpdateEndpoint:

    @pytest.mark.asyncio
    async def test_updated_with_new_etag(self, test_client):
        id = await _create(test_client)

        response = await test_client.put(
            f"/rest/{id}", json={**ALPHA, "name": "Alpha2"}, headers={"If-Match": '"0"'}
        )

        assert response.status_code == 204
        assert response.headers["ETag"] == '"1"'
        assert (await test_client.get(f"/rest/{id}")).json()["name"] == "Alpha2"

    @pytest.mark.asyncio
    async def test_missing_if_match(self, test_client):
        id = await _create(test_client)

        response = await test_client.put(f"/rest/{id}", json=ALPHA)

        assert response.status_code == 428
        assert response.text == 'Header "If-Match" is missing'

    @pytest.mark.asyncio
    async def test_outdated_version(self, test_client):
        id = await _create(test_client)
        await test_client.put(f"/rest/{id}", json=ALPHA, headers={"If-Match": '"0"'})

        response = await test_client.put(f"/rest/{id}", json=ALPHA, headers={"If-Match": '"0"'})

        assert response.status_code == 412
        assert response.text == 'The version number "0" is out of date.'

    @pytest.mark.asyncio
    async def test_invalid_version(self, test_client):
        id = await _create(test_client)

        response = await test_client.put(f"/rest/{id}", json=ALPHA, headers={"If-Match": "abc"})

        assert response.status_code == 412
        assert response.text == 'The version number "abc" is invalid.'

    @pytest.mark.asyncio
    async def test_unknown_id(self, test_client):
        id = str(uuid.uuid4())

        response = await test_client.put(f"/rest/{id}", json=ALPHA, headers={"If-Match": '"0"'})

        assert response.status_code == 412
        assert response.text == f'There is no manufacturer with the ID "{id}".'

    @pytest.mark.asyncio
    async def test_constraint_violations(self, test_client):
        id = await _create(test_client)

        response = await test_client.put(
            f"/rest/{id}", json={"name": "Alpha", "homepage": "nope"}, headers={"If-Match": '"0"'}
        )

        assert response.status_code == 422
        assert response.json() == ["The homepage is not a valid URI."]

    @pytest.mark.asyncio
    async def test_name_taken(self, test_client):
        await _create(test_client)
        beta = await _create(test_client, {"name": "Beta"})

        response = await test_client.put(
            f"/rest/{beta}", json={"name": "Alpha"}, headers={"If-Match": '"0"'}
        )

        assert response.status_code == 422
        assert response.text == 'The name "Alpha" already exists.'


class TestDeleteEndpoint:

    @pytest.mark.asyncio
    async def test_delete_existing(self, test_client):
        id = await _create(test_client)

        assert (await test_client.delete(f"/rest/{id}")).status_code == 204
        assert (await test_client.get(f"/rest/{id}")).status_code == 404

    @pytest.mark.asyncio
    async def test_delete_missing_is_still_no_content(self, test_client):
        assert (await test_client.delete(f"/rest/{uuid.uuid4()}")).status_code == 204
        assert (await test_client.delete("/rest/not-an-id")).status_code == 204


class TestHealthEndpoint:

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert response.headers["X-Request-ID"]

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, test_client):
        response = await test_client.get("/health", headers={"X-Request-ID": "abc12345"})

        assert response.headers["X-Request-ID"] == "abc12345"
