"""
Catalog API — Product Endpoint Tests
======================================

What:  HTTP-level tests of the five product operations.
How:   httpx AsyncClient over ASGITransport against in-memory SQLite.

What we test:
    ✅ Pagination envelope, defaults, integer-prefix parsing, bad parameters
    ✅ Create: 201, price parsing, field-specific 400s in order
    ✅ Get / update / delete including 404 for unknown or deleted ids
    ✅ Every error body is {"error": "..."}
"""

import pytest

BASE = "/api/products"


async def _create(client, name="Pizza", category="Food", price="29.99"):
    response = await client.post(BASE, json={"name": name, "category": category, "price": price})
    assert response.status_code == 201, response.text
    return response.json()


class TestListEndpoint:

    @pytest.mark.asyncio
    async def test_empty_store(self, test_client):
        response = await test_client.get(BASE, params={"page": "1", "page_size": "10"})

        assert response.status_code == 200
        assert response.json() == {
            "count": 0,
            "total_pages": 0,
            "page_size": 10,
            "page": 1,
            "results": [],
        }

    @pytest.mark.asyncio
    async def test_trailing_slash(self, test_client):
        response = await test_client.get(f"{BASE}/")
        assert response.status_code == 200
        assert response.json()["page_size"] == 10

    @pytest.mark.asyncio
    async def test_pages_cover_all_records(self, test_client):
        for i in range(25):
            await _create(test_client, name=f"Item {i}", price=i)

        pages = []
        for page in (1, 2, 3, 4):
            response = await test_client.get(BASE, params={"page": page, "page_size": 10})
            body = response.json()
            assert body["count"] == 25
            assert body["total_pages"] == 3
            assert len(body["results"]) <= 10
            pages.append(body["results"])

        assert [len(p) for p in pages] == [10, 10, 5, 0]
        names = [item["name"] for page in pages for item in page]
        assert names == [f"Item {i}" for i in range(25)]

    @pytest.mark.asyncio
    async def test_page_uses_leading_integer(self, test_client):
        for i in range(3):
            await _create(test_client, name=f"Item {i}")

        response = await test_client.get(BASE, params={"page": "2abc", "page_size": "2"})

        body = response.json()
        assert response.status_code == 200
        assert body["page"] == 2
        assert [item["name"] for item in body["results"]] == ["Item 2"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "params, field",
        [
            ({"page": "abc"}, "page"),
            ({"page": "0"}, "page"),
            ({"page_size": "0"}, "page_size"),
            ({"page_size": "-5"}, "page_size"),
        ],
    )
    async def test_invalid_pagination_rejected(self, test_client, params, field):
        response = await test_client.get(BASE, params=params)

        assert response.status_code == 400
        assert f"[{field}]" in response.json()["error"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "params, field",
        [
            ({"page": "99999999999999999999"}, "page"),
            ({"page_size": "99999999999999999999"}, "page_size"),
            ({"page": str(2**63 - 1), "page_size": "10"}, "page"),
        ],
    )
    async def test_out_of_range_pagination_rejected(self, test_client, params, field):
        response = await test_client.get(BASE, params=params)

        assert response.status_code == 400
        assert f"[{field}]" in response.json()["error"]

    @pytest.mark.asyncio
    async def test_largest_page_size_accepted(self, test_client):
        await _create(test_client)

        response = await test_client.get(BASE, params={"page_size": str(2**63 - 1)})

        assert response.status_code == 200
        assert len(response.json()["results"]) == 1


class TestCreateEndpoint:

    @pytest.mark.asyncio
    async def test_create_parses_price(self, test_client):
        response = await test_client.post(
            BASE, json={"name": "Pizza", "category": "Food", "price": "29.99"}
        )

        assert response.status_code == 201
        body = response.json()
        assert body["price"] == 29.99
        assert isinstance(body["id"], int)
        assert body["name"] == "Pizza"
        assert body["category"] == "Food"

    @pytest.mark.asyncio
    async def test_missing_category(self, test_client):
        response = await test_client.post(BASE, json={"name": "Pizza", "price": "29.99"})

        assert response.status_code == 400
        assert response.json() == {"error": "The field [category] is required"}

    @pytest.mark.asyncio
    async def test_first_missing_field_reported(self, test_client):
        response = await test_client.post(BASE, json={"price": 1})
        assert response.json()["error"] == "The field [name] is required"

        response = await test_client.post(BASE, json={"name": "Pizza", "category": "Food"})
        assert response.json()["error"] == "The field [price] is required"

    @pytest.mark.asyncio
    async def test_no_body(self, test_client):
        response = await test_client.post(BASE)

        assert response.status_code == 400
        assert response.json()["error"] == "The field [name] is required"

    @pytest.mark.asyncio
    async def test_non_numeric_price(self, test_client):
        response = await test_client.post(
            BASE, json={"name": "Pizza", "category": "Food", "price": "cheap"}
        )

        assert response.status_code == 400
        assert "[price]" in response.json()["error"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("price", [True, False, "1_000"])
    async def test_price_must_be_plain_number(self, test_client, price):
        response = await test_client.post(
            BASE, json={"name": "Pizza", "category": "Food", "price": price}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "The field [price] must be a number"
        assert (await test_client.get(BASE)).json()["count"] == 0

    @pytest.mark.asyncio
    async def test_integer_price_accepted(self, test_client):
        created = await _create(test_client, price=7)
        assert created["price"] == 7.0

    @pytest.mark.asyncio
    async def test_malformed_json(self, test_client):
        response = await test_client.post(
            BASE, content=b"{not json", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert "error" in response.json()

    @pytest.mark.asyncio
    async def test_created_record_is_listed(self, test_client):
        created = await _create(test_client)

        body = (await test_client.get(BASE)).json()

        assert body["count"] == 1
        assert body["results"] == [created]


class TestGetEndpoint:

    @pytest.mark.asyncio
    async def test_get_existing(self, test_client):
        created = await _create(test_client)

        response = await test_client.get(f"{BASE}/{created['id']}")

        assert response.status_code == 200
        assert response.json() == created

    @pytest.mark.asyncio
    async def test_get_unknown(self, test_client):
        response = await test_client.get(f"{BASE}/999")

        assert response.status_code == 404
        assert "error" in response.json()

    @pytest.mark.asyncio
    async def test_non_integer_id(self, test_client):
        response = await test_client.get(f"{BASE}/abc")

        assert response.status_code == 400
        assert "product_id" in response.json()["error"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["get", "delete"])
    async def test_id_beyond_column_range_is_not_found(self, test_client, method):
        response = await test_client.request(method.upper(), f"{BASE}/99999999999999999999")

        assert response.status_code == 404
        assert "error" in response.json()

    @pytest.mark.asyncio
    async def test_update_id_beyond_column_range_is_not_found(self, test_client):
        response = await test_client.patch(f"{BASE}/99999999999999999999", json={"name": "Ghost"})

        assert response.status_code == 404


class TestUpdateEndpoint:

    @pytest.mark.asyncio
    async def test_update_price_only(self, test_client):
        created = await _create(test_client, name="Pizza", category="Food", price="29.99")

        response = await test_client.patch(f"{BASE}/{created['id']}", json={"price": "19.90"})

        assert response.status_code == 200
        body = response.json()
        assert body["price"] == 19.9
        assert body["name"] == "Pizza"
        assert body["category"] == "Food"

        fetched = (await test_client.get(f"{BASE}/{created['id']}")).json()
        assert fetched == body

    @pytest.mark.asyncio
    async def test_update_name_keeps_price(self, test_client):
        created = await _create(test_client)

        response = await test_client.patch(f"{BASE}/{created['id']}", json={"name": "Calzone"})

        assert response.json()["name"] == "Calzone"
        assert response.json()["price"] == 29.99

    @pytest.mark.asyncio
    async def test_empty_update_returns_record(self, test_client):
        created = await _create(test_client)

        response = await test_client.patch(f"{BASE}/{created['id']}", json={})

        assert response.status_code == 200
        assert response.json() == created

    @pytest.mark.asyncio
    async def test_update_unknown(self, test_client):
        response = await test_client.patch(f"{BASE}/999", json={"name": "Ghost"})

        assert response.status_code == 404
        assert "error" in response.json()

    @pytest.mark.asyncio
    async def test_update_invalid_price(self, test_client):
        created = await _create(test_client)

        response = await test_client.patch(f"{BASE}/{created['id']}", json={"price": -1})

        assert response.status_code == 400
        unchanged = (await test_client.get(f"{BASE}/{created['id']}")).json()
        assert unchanged["price"] == 29.99

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload, field",
        [
            ({"name": "", "category": "   "}, "name"),
            ({"category": "   "}, "category"),
            ({"name": None}, "name"),
            ({"price": None}, "price"),
        ],
    )
    async def test_blank_supplied_field_rejected(self, test_client, payload, field):
        created = await _create(test_client)

        response = await test_client.patch(f"{BASE}/{created['id']}", json=payload)

        assert response.status_code == 400
        assert f"[{field}]" in response.json()["error"]
        unchanged = (await test_client.get(f"{BASE}/{created['id']}")).json()
        assert unchanged == created


class TestDeleteEndpoint:

    @pytest.mark.asyncio
    async def test_delete_then_fetch(self, test_client):
        created = await _create(test_client)

        response = await test_client.delete(f"{BASE}/{created['id']}")

        assert response.status_code == 204
        assert response.content == b""

        fetched = await test_client.get(f"{BASE}/{created['id']}")
        assert fetched.status_code == 404

    @pytest.mark.asyncio
    async def test_deleted_id_cannot_be_updated_or_deleted_again(self, test_client):
        created = await _create(test_client)
        await test_client.delete(f"{BASE}/{created['id']}")

        assert (await test_client.delete(f"{BASE}/{created['id']}")).status_code == 404
        patched = await test_client.patch(f"{BASE}/{created['id']}", json={"name": "Back"})
        assert patched.status_code == 404

    @pytest.mark.asyncio
    async def test_deleted_id_not_reused(self, test_client):
        first = await _create(test_client, name="First")
        await test_client.delete(f"{BASE}/{first['id']}")

        second = await _create(test_client, name="Second")

        assert (await test_client.get(f"{BASE}/{first['id']}")).status_code == 404
        assert (await test_client.get(f"{BASE}/{second['id']}")).json()["name"] == "Second"
