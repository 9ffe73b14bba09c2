"""Integration tests for the GraphQL HTTP endpoint."""

from __future__ import annotations

import pytest
from httpx import AsyncClient

from tests.utils import LOGOUT_MUTATION, RETURN_ERROR_QUERY, USERS_QUERY


@pytest.mark.integration
class TestGraphQLEndpoint:
    async def test_post_query(self, client: AsyncClient):
        response = await client.post("/graphql", json={"query": USERS_QUERY})

        assert response.status_code == 200
        assert response.json()["data"]["users"][0] == {"userId": "1", "userName": "UserOne"}

    async def test_get_query(self, client: AsyncClient):
        response = await client.get("/graphql", params={"query": '{ user(id: "1") { userName } }'})

        assert response.status_code == 200
        assert response.json() == {"data": {"user": {"userName": "UserOne"}}}

    async def test_post_mutation(self, client: AsyncClient):
        response = await client.post("/graphql", json={"query": LOGOUT_MUTATION})

        assert response.json() == {"data": {"logout": {"result": "Goodbye!"}}}

    async def test_get_mutation_rejected(self, client: AsyncClient):
        response = await client.get("/graphql", params={"query": LOGOUT_MUTATION})

        assert response.status_code == 405
        assert response.headers["allow"] == "POST"

    async def test_put_rejected(self, client: AsyncClient):
        response = await client.put("/graphql", json={"query": USERS_QUERY})

        assert response.status_code == 405
        assert response.headers["allow"] == "GET, POST"
        assert "errors" in response.json()

    async def test_resolver_error(self, client: AsyncClient):
        response = await client.post("/graphql", json={"query": RETURN_ERROR_QUERY})

        body = response.json()
        assert body["data"] == {"returnError": None}
        assert body["errors"][0]["message"] == "Something went wrong!"
        assert body["errors"][0]["path"] == ["returnError"]

    async def test_syntax_error(self, client: AsyncClient):
        response = await client.post("/graphql", json={"query": "query users{ users { userId"})

        assert response.status_code == 400
        assert response.json()["errors"][0]["message"].startswith("Syntax Error")

    async def test_invalid_json_body(self, client: AsyncClient):
        response = await client.post(
            "/graphql",
            content=b"{not json",
            headers={"content-type": "application/json"},
        )

        assert response.status_code == 400
        assert "JSON" in response.json()["errors"][0]["message"]
