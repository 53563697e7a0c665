import pytest


@pytest.fixture
def headers(auth_headers):
    return auth_headers()


async def create_user(client, headers, email="u@x.com", **extra):
    response = await client.post("/user/", json={"email": email, "password": "p", **extra}, headers=headers)
    assert response.status_code == 200
    return response.json()


async def test_user_routes_require_a_token(user_client):
    for method, path in [("GET", "/user/"), ("GET", "/user/1"), ("POST", "/user/"),
                         ("PUT", "/user/1"), ("DELETE", "/user/1")]:
        response = await user_client.request(method, path, json={})
        assert response.status_code == 401, (method, path)
        assert response.json() == {"error": "not authenticated"}


async def test_list_and_get(user_client, headers):
    first = await create_user(user_client, headers, "one@x.com", firstName="One")
    second = await create_user(user_client, headers, "two@x.com")

    listed = (await user_client.get("/user/", headers=headers)).json()
    fetched = (await user_client.get(f"/user/{first['id']}", headers=headers)).json()

    assert [user["id"] for user in listed] == [first["id"], second["id"]]
    assert fetched["firstName"] == "One"


async def test_missing_user_is_not_found(user_client, headers):
    response = await user_client.get("/user/404", headers=headers)

    assert response.status_code == 404
    assert response.json() == {"error": "record not found"}


async def test_partial_update_touches_only_given_fields(user_client, headers):
    user = await create_user(user_client, headers, firstName="Ann", lastName="Lee")

    response = await user_client.put(f"/user/{user['id']}", json={"lastName": "Park"}, headers=headers)

    assert response.status_code == 200
    updated = response.json()
    assert updated["lastName"] == "Park"
    assert updated["firstName"] == "Ann"
    assert updated["email"] == user["email"]


async def test_empty_update_is_a_no_op(user_client, headers):
    user = await create_user(user_client, headers)

    response = await user_client.put(f"/user/{user['id']}", json={}, headers=headers)

    assert response.status_code == 200
    assert response.json()["email"] == user["email"]


async def test_unknown_update_field_is_rejected(user_client, headers):
    user = await create_user(user_client, headers)

    response = await user_client.put(
        f"/user/{user['id']}", json={"hashedPassword": "x"}, headers=headers
    )

    assert response.status_code == 400
    assert response.json() == {"error": "validation error"}


async def test_password_update_is_hashed(user_client, headers):
    user = await create_user(user_client, headers)

    await user_client.put(f"/user/{user['id']}", json={"password": "new-secret"}, headers=headers)

    old = await user_client.post("/auth/login", json={"email": "u@x.com", "password": "p"})
    new = await user_client.post("/auth/login", json={"email": "u@x.com", "password": "new-secret"})
    assert old.status_code == 401
    assert new.status_code == 200


async def test_update_to_a_taken_email_is_a_conflict(user_client, headers):
    await create_user(user_client, headers, "taken@x.com")
    user = await create_user(user_client, headers, "free@x.com")

    response = await user_client.put(f"/user/{user['id']}", json={"email": "taken@x.com"}, headers=headers)

    assert response.status_code == 409


async def test_update_missing_user_is_not_found(user_client, headers):
    response = await user_client.put("/user/404", json={"firstName": "X"}, headers=headers)
    assert response.status_code == 404


async def test_delete(user_client, headers):
    user = await create_user(user_client, headers)

    deleted = await user_client.delete(f"/user/{user['id']}", headers=headers)
    again = await user_client.delete(f"/user/{user['id']}", headers=headers)

    assert deleted.status_code == 200
    assert deleted.json() == {"message": "resource deleted successfully"}
    assert again.status_code == 404
    assert (await user_client.get(f"/user/{user['id']}", headers=headers)).status_code == 404


async def test_health_is_public(user_client):
    response = await user_client.get("/health")
    assert response.json() == {"service": "user", "status": "running"}


async def test_null_clears_a_name_but_not_the_email(user_client, headers):
    user = await create_user(user_client, headers, firstName="Ann")

    cleared = await user_client.put(f"/user/{user['id']}", json={"firstName": None}, headers=headers)
    rejected = await user_client.put(f"/user/{user['id']}", json={"email": None}, headers=headers)

    assert cleared.status_code == 200
    assert cleared.json()["firstName"] is None
    assert rejected.status_code == 400
