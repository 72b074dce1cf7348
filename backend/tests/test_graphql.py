"""
Hersteller Service — GraphQL Endpoint Tests
=============================================

What:  Queries and mutations on /graphql, including business errors.
How:   POSTs GraphQL documents through the shared test client.
"""

import uuid

import pytest

CREATE = """
mutation Create($input: HerstellerInput!) {
  create(input: $input)
}
"""

UPDATE = """
mutation Update($input: HerstellerUpdateInput!) {
  update(input: $input)
}
"""

DELETE = """
mutation Delete($id: ID!) {
  delete(id: $id)
}
"""

FIND_BY_ID = """
query FindById($id: ID!) {
  hersteller(id: $id) { id version name telephone homepage schlagwoerter }
}
"""

FIND = """
query Find($name: String) {
  herstellers(name: $name) { name }
}
"""


async def _graphql(client, query, **variables):
    response = await client.post("/graphql", json={"query": query, "variables": variables})
    assert response.status_code == 200
    return response.json()


async def _create(client, **fields):
    result = await _graphql(client, CREATE, input={"name": "Alpha", **fields})
    return result["data"]["create"]


class TestQueries:

    @pytest.mark.asyncio
    async def test_find_by_id(self, test_client):
        id = await _create(test_client, telephone="12345678901", schlagwoerter=["JAVASCRIPT"])

        result = await _graphql(test_client, FIND_BY_ID, id=id)

        assert result["data"]["hersteller"] == {
            "id": id,
            "version": 0,
            "name": "Alpha",
            "telephone": "12345678901",
            "homepage": None,
            "schlagwoerter": ["JAVASCRIPT"],
        }

    @pytest.mark.asyncio
    async def test_find_by_id_not_found(self, test_client):
        id = str(uuid.uuid4())

        result = await _graphql(test_client, FIND_BY_ID, id=id)

        assert result["data"] is None
        assert result["errors"][0]["message"] == f"No manufacturer with the ID {id} was found."

    @pytest.mark.asyncio
    async def test_find_by_name(self, test_client):
        await _create(test_client)
        await _create(test_client, name="Beta")

        result = await _graphql(test_client, FIND, name="bet")

        assert result["data"]["herstellers"] == [{"name": "Beta"}]

    @pytest.mark.asyncio
    async def test_find_all(self, test_client):
        await _create(test_client)
        await _create(test_client, name="Beta")

        result = await _graphql(test_client, FIND)

        assert {h["name"] for h in result["data"]["herstellers"]} == {"Alpha", "Beta"}

    @pytest.mark.asyncio
    async def test_find_nothing(self, test_client):
        result = await _graphql(test_client, FIND, name="Omega")

        assert result["errors"][0]["message"] == "No manufacturers were found."


class TestMutations:

    @pytest.mark.asyncio
    async def test_round_trip(self, test_client):
        id = await _create(test_client, homepage="https://acme.test/")

        updated = await _graphql(test_client, UPDATE, input={"id": id, "version": 0, "name": "Alpha2"})
        assert updated["data"]["update"] == 1

        found = await _graphql(test_client, FIND_BY_ID, id=id)
        assert found["data"]["hersteller"]["name"] == "Alpha2"
        assert found["data"]["hersteller"]["homepage"] == "https://acme.test/"

        deleted = await _graphql(test_client, DELETE, id=id)
        assert deleted["data"]["delete"] is True

        assert (await _graphql(test_client, DELETE, id=id))["data"]["delete"] is False

    @pytest.mark.asyncio
    async def test_create_constraint_violations(self, test_client):
        result = await _graphql(test_client, CREATE, input={"name": "!"})

        assert result["errors"][0]["message"] == (
            "A manufacturer name must start with a letter, a digit or _."
        )
        assert result["errors"][0]["extensions"]["code"] == "BAD_USER_INPUT"

    @pytest.mark.asyncio
    async def test_create_duplicate_name(self, test_client):
        await _create(test_client)

        result = await _graphql(test_client, CREATE, input={"name": "Alpha"})

        assert result["errors"][0]["message"] == 'The name "Alpha" already exists.'

    @pytest.mark.asyncio
    async def test_update_outdated_version(self, test_client):
        id = await _create(test_client)
        await _graphql(test_client, UPDATE, input={"id": id, "version": 0, "name": "Alpha"})

        result = await _graphql(test_client, UPDATE, input={"id": id, "version": 0, "name": "Alpha"})

        assert result["errors"][0]["message"] == 'The version number "0" is out of date.'

    @pytest.mark.asyncio
    async def test_update_without_version(self, test_client):
        id = await _create(test_client)

        result = await _graphql(test_client, UPDATE, input={"id": id, "name": "Alpha"})

        assert result["errors"][0]["message"] == 'The version number "None" is invalid.'

    @pytest.mark.asyncio
    async def test_update_unknown_id(self, test_client):
        id = str(uuid.uuid4())

        result = await _graphql(test_client, UPDATE, input={"id": id, "version": 0, "name": "Alpha"})

        assert result["errors"][0]["message"] == f'There is no manufacturer with the ID "{id}".'
