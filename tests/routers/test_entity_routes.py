"""Tests for the paginated entity endpoints."""

from urllib.parse import unquote

import pytest


@pytest.mark.parametrize("path", ["/users", "/users/current", "/clients", "/offers", "/candidates"])
def test_routes_require_authentication(client, path):
    response = client.get(path)

    assert response.status_code == 401
    assert response.json()["message"] == "Authentication token missing"


class TestListOffers:
    def test_lists_with_metadata(self, client, seeded, auth_headers):
        response = client.get("/offers?perPage=2", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert [o["job"] for o in data["offers"]] == ["Backend developer", "Data intern"]
        assert data["offers"][0]["owner"]["name"] == "Acme"
        assert data["offers"][0]["referrer"]["firstName"] == "Ada"
        assert data["offers"][0]["annualSalary"] == 45000
        assert data["offers"][0]["contractType"] == "permanent"
        assert data["metadata"] == {
            "page": 0,
            "perPage": 2,
            "pageCount": 2,
            "totalItems": 3,
            "links": {
                "self": "/offers?page=0&perPage=2",
                "first": "/offers?page=0&perPage=2",
                "previous": None,
                "next": "/offers?page=1&perPage=2",
                "last": "/offers?page=1&perPage=2",
            },
        }

    def test_default_pagination(self, client, seeded, auth_headers):
        data = client.get("/offers", headers=auth_headers).json()

        assert data["metadata"]["page"] == 0
        assert data["metadata"]["perPage"] == 20
        assert data["metadata"]["pageCount"] == 1

    def test_number_comparison(self, client, seeded, auth_headers):
        response = client.get(
            "/offers?annualSalary[filter]=morethan&annualSalary[criterias][]=40000",
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert sorted(o["job"] for o in data["offers"]) == ["Backend developer", "Ops engineer"]
        assert data["metadata"]["totalItems"] == 2
        # Filters are carried over to every navigation link
        assert unquote(data["metadata"]["links"]["self"]) == (
            "/offers?page=0&perPage=20"
            "&annualSalary[filter]=morethan&annualSalary[criterias][]=40000"
        )

    def test_order(self, client, seeded, auth_headers):
        response = client.get("/offers?order[annualSalary]=DESC", headers=auth_headers)

        assert [o["annualSalary"] for o in response.json()["offers"]] == [52000, 45000, 12000]

    def test_string_contains_is_case_insensitive(self, client, seeded, auth_headers):
        response = client.get(
            "/offers?job[filter]=contains&job[criterias][]=DEV", headers=auth_headers
        )

        assert [o["job"] for o in response.json()["offers"]] == ["Backend developer"]

    def test_enum_filter(self, client, seeded, auth_headers):
        response = client.get(
            "/offers?contractType[filter]=not&contractType[criterias][]=permanent"
            "&contractType[criterias][]=fixed",
            headers=auth_headers,
        )

        assert [o["job"] for o in response.json()["offers"]] == ["Data intern"]

    def test_indexed_criterias(self, client, seeded, auth_headers):
        response = client.get(
            "/offers?contractType[filter]=not&contractType[criterias][0]=permanent"
            "&contractType[criterias][1]=fixed",
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert [o["job"] for o in response.json()["offers"]] == ["Data intern"]

    def test_enum_filter_rejects_unknown_value(self, client, seeded, auth_headers):
        response = client.get(
            "/offers?contractType[criterias][]=freelance", headers=auth_headers
        )

        assert response.status_code == 400
        assert "contractType.criterias" in response.json()["message"]

    def test_referrer_slug(self, client, seeded, auth_headers):
        slug = seeded["users"]["grace"].slug
        response = client.get(f"/offers?referrer[criterias][]={slug}", headers=auth_headers)

        assert [o["job"] for o in response.json()["offers"]] == ["Data intern"]

    def test_referrer_isnull(self, client, seeded, auth_headers):
        response = client.get("/offers?referrer[filter]=isnull", headers=auth_headers)

        assert [o["job"] for o in response.json()["offers"]] == ["Ops engineer"]

    def test_unknown_slug(self, client, seeded, auth_headers):
        response = client.get("/offers?referrer[criterias][]=nobody-1234", headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Provided slugs does not match resources."

    def test_unknown_property(self, client, seeded, auth_headers):
        response = client.get("/offers?salary=1", headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "property salary should not exist"

    def test_per_page_upper_bound(self, client, seeded, auth_headers):
        response = client.get("/offers?perPage=101", headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "perPage must not be greater than 100"

    def test_page_index_exceeded(self, client, seeded, auth_headers):
        response = client.get("/offers?page=5&perPage=2", headers=auth_headers)

        assert response.status_code == 404
        assert response.json() == {
            "status": 404,
            "message": "Page index exceeded",
            "hint": (
                "Page n°5 cannot be found with 2 items per page. "
                "Last available page can be retrieved here: /offers?page=1&perPage=2"
            ),
        }

    def test_page_equal_to_page_count_is_empty(self, client, seeded, auth_headers):
        response = client.get("/offers?page=2&perPage=2", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["message"] == "No offers found"

    def test_no_match(self, client, seeded, auth_headers):
        response = client.get("/offers?job[criterias][]=Pilot", headers=auth_headers)

        assert response.status_code == 404
        assert response.json() == {
            "status": 404,
            "message": "No offers found",
            "hint": {"appliedFilters": {"job": {"criterias": ["Pilot"]}}},
        }

    def test_empty_collection(self, client, auth_headers):
        response = client.get("/offers", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["hint"] == "The collection is empty, no filter was applied"


class TestOfferDetail:
    def test_get_offer(self, client, seeded, auth_headers):
        response = client.get("/offers/acme-backend-developer", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["owner"]["slug"] == "acme"
        assert data["processes"][0]["status"] == "selectionné"
        assert data["processes"][0]["candidate"]["name"] == "Alice Martin"

    def test_unknown_offer(self, client, seeded, auth_headers):
        response = client.get("/offers/nope", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["message"] == "Offer with id nope not found"


class TestUsers:
    def test_current_user(self, client, test_user, auth_headers):
        response = client.get("/users/current", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["slug"] == test_user.slug
        assert "password" not in response.json()

    def test_list_users_filtered(self, client, seeded, auth_headers):
        response = client.get("/users?firstName[criterias][]=Grace", headers=auth_headers)

        assert [u["email"] for u in response.json()["users"]] == ["grace@example.com"]

    def test_list_users_sorted(self, client, seeded, auth_headers):
        response = client.get("/users?order[lastName]=ASC", headers=auth_headers)

        assert [u["lastName"] for u in response.json()["users"]] == ["Hopper", "Lovelace"]

    def test_user_detail(self, client, seeded, auth_headers):
        slug = seeded["users"]["ada"].slug
        data = client.get(f"/users/{slug}", headers=auth_headers).json()

        assert [o["job"] for o in data["offers"]] == ["Backend developer"]
        assert [c["name"] for c in data["clients"]] == ["Acme"]

    def test_unknown_user(self, client, test_user, auth_headers):
        response = client.get("/users/nobody", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["message"] == "User with id nobody not found"


class TestClients:
    def test_list_by_account_manager(self, client, seeded, auth_headers):
        slug = seeded["users"]["grace"].slug
        response = client.get(
            f"/clients?accountManager[criterias][]={slug}", headers=auth_headers
        )

        data = response.json()
        assert [c["name"] for c in data["clients"]] == ["Globex Corp"]
        assert data["clients"][0]["accountManager"]["slug"] == slug
        assert [o["job"] for o in data["clients"][0]["offers"]] == ["Ops engineer"]

    def test_create_client(self, client, seeded, auth_headers):
        response = client.post(
            "/clients",
            json={
                "name": "Initech",
                "phone": "+33 1 23 45 67 89",
                "accountManager": seeded["users"]["ada"].slug,
            },
            headers=auth_headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["slug"] == "initech"
        assert data["accountManager"]["email"] == "ada@example.com"
        assert data["offers"] == []

    def test_create_duplicate_client(self, client, seeded, auth_headers):
        response = client.post(
            "/clients", json={"name": "Acme", "phone": "0102030405"}, headers=auth_headers
        )

        assert response.status_code == 400
        data = response.json()
        assert data["message"] == "Client named Acme already exists"
        assert data["hint"]["slug"] == "acme"

    def test_create_with_unknown_account_manager(self, client, seeded, auth_headers):
        response = client.post(
            "/clients",
            json={"name": "Initech", "phone": "0102030405", "accountManager": "nobody"},
            headers=auth_headers,
        )

        assert response.status_code == 404
        assert response.json()["message"] == "User with id nobody not found"

    def test_get_client(self, client, seeded, auth_headers):
        response = client.get("/clients/globex-corp", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["name"] == "Globex Corp"


class TestCandidates:
    def test_list_by_email_suffix(self, client, seeded, auth_headers):
        response = client.get(
            "/candidates?email[filter]=endswith&email[criterias][]=example.org",
            headers=auth_headers,
        )

        assert [c["name"] for c in response.json()["candidates"]] == ["Bob Durand"]

    def test_list_sorted_desc(self, client, seeded, auth_headers):
        response = client.get("/candidates?order[name]=DESC", headers=auth_headers)

        names = [c["name"] for c in response.json()["candidates"]]
        assert names == ["Bob Durand", "Alice Martin"]

    def test_candidate_detail(self, client, seeded, auth_headers):
        response = client.get("/candidates/alice-martin", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["qualification"]["rank"] == 3
        assert data["referrer"]["firstName"] == "Ada"
        assert data["processes"][0]["offer"]["slug"] == "acme-backend-developer"
        assert data["interviews"][0]["comments"] == "Strong on SQL"

    def test_unknown_candidate(self, client, seeded, auth_headers):
        response = client.get("/candidates/nobody", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["message"] == "Candidate with id nobody not found"
