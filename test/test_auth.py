from fastapi.testclient import TestClient
from app.utility.security import sign_refresh_token
from conftest import USERS_URL, register_user, login_user, bearer, set_cookie_headers, cookie_names


def test_login_sets_exactly_the_two_auth_cookies(client):
    register_user(client)

    response = login_user(client)

    assert response.status_code == 200
    assert cookie_names(response) == ["accessToken", "refreshToken"]
    for header in set_cookie_headers(response):
        assert "httponly" in header.lower()
        assert "secure" in header.lower()

    data = response.json()["data"]
    assert data["accessToken"]
    assert data["refreshToken"]
    assert data["accessToken"] != data["refreshToken"]
    assert data["user"]["username"] == "abc"
    assert "password" not in data["user"]
    assert "refreshToken" not in data["user"]


def test_login_by_email(client):
    register_user(client)

    response = login_user(client, email="A@B.com")

    assert response.status_code == 200


def test_login_with_wrong_password_sets_no_cookies(client):
    register_user(client)

    response = login_user(client, password="wrong")

    assert response.status_code == 401
    assert set_cookie_headers(response) == []


def test_login_unknown_user_is_not_found(client):
    response = login_user(client, username="ghost")

    assert response.status_code == 404


def test_login_requires_username_or_email(client):
    response = client.post(f"{USERS_URL}/login", json={"password": "pw"})

    assert response.status_code == 400
    assert response.json()["message"] == "Username or email is required"


def test_login_without_body_is_a_bad_request(client):
    response = client.post(f"{USERS_URL}/login")

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid request"


def test_access_token_authenticates_current_user(client):
    register_user(client)
    tokens = login_user(client).json()["data"]

    response = client.get(f"{USERS_URL}/current", headers=bearer(tokens["accessToken"]))

    assert response.status_code == 200
    assert response.json()["data"]["username"] == "abc"
    assert "password" not in response.json()["data"]


def test_refresh_token_is_not_an_access_token(client):
    register_user(client)
    tokens = login_user(client).json()["data"]

    response = client.get(f"{USERS_URL}/current", headers=bearer(tokens["refreshToken"]))

    assert response.status_code == 401


def test_current_requires_authentication(client):
    response = client.get(f"{USERS_URL}/current")

    assert response.status_code == 401
    assert response.json()["message"] == "Unauthorized request"


def test_refresh_rotates_and_invalidates_previous_token(client):
    register_user(client)
    old_refresh_token = login_user(client).json()["data"]["refreshToken"]

    response = client.post(f"{USERS_URL}/refresh-token", json={"refreshToken": old_refresh_token})

    assert response.status_code == 200
    assert cookie_names(response) == ["accessToken", "refreshToken"]
    new_refresh_token = response.json()["data"]["refreshToken"]
    assert new_refresh_token != old_refresh_token

    reused = client.post(f"{USERS_URL}/refresh-token", json={"refreshToken": old_refresh_token})
    assert reused.status_code == 401
    assert reused.json()["message"] == "Refresh token is expired or used"

    again = client.post(f"{USERS_URL}/refresh-token", json={"refreshToken": new_refresh_token})
    assert again.status_code == 200


def test_login_invalidates_previous_refresh_token(client):
    register_user(client)
    first = login_user(client).json()["data"]["refreshToken"]
    login_user(client)

    response = client.post(f"{USERS_URL}/refresh-token", json={"refreshToken": first})

    assert response.status_code == 401


def test_refresh_with_garbled_token_keeps_stored_token(client):
    register_user(client)
    refresh_token = login_user(client).json()["data"]["refreshToken"]

    response = client.post(f"{USERS_URL}/refresh-token", json={"refreshToken": "not.a.jwt"})

    assert response.status_code == 401
    assert set_cookie_headers(response) == []
    assert client.post(f"{USERS_URL}/refresh-token", json={"refreshToken": refresh_token}).status_code == 200


def test_refresh_with_expired_token_fails(client, settings):
    register_user(client)
    user_id = login_user(client).json()["data"]["user"]["_id"]
    expired = sign_refresh_token(user_id, settings.refresh_token_secret, -60)

    response = client.post(f"{USERS_URL}/refresh-token", json={"refreshToken": expired})

    assert response.status_code == 401
    assert set_cookie_headers(response) == []


def test_refresh_without_token_is_unauthorized(client):
    response = client.post(f"{USERS_URL}/refresh-token")

    assert response.status_code == 401
    assert response.json()["message"] == "Unauthorized request"


def test_refresh_and_current_read_cookies(application):
    with TestClient(application, base_url="https://testserver") as secure_client:
        register_user(secure_client)
        assert login_user(secure_client).status_code == 200

        assert secure_client.get(f"{USERS_URL}/current").status_code == 200

        response = secure_client.post(f"{USERS_URL}/refresh-token")
        assert response.status_code == 200
        assert secure_client.cookies.get("refreshToken") == response.json()["data"]["refreshToken"]


def test_logout_clears_cookies_and_stored_refresh_token(client):
    register_user(client)
    tokens = login_user(client).json()["data"]

    response = client.post(f"{USERS_URL}/logout", headers=bearer(tokens["accessToken"]))

    assert response.status_code == 200
    assert cookie_names(response) == ["accessToken", "refreshToken"]
    for header in set_cookie_headers(response):
        assert "max-age=0" in header.lower()

    refreshed = client.post(f"{USERS_URL}/refresh-token", json={"refreshToken": tokens["refreshToken"]})
    assert refreshed.status_code == 401

    # access tokens stay valid until they expire
    assert client.get(f"{USERS_URL}/current", headers=bearer(tokens["accessToken"])).status_code == 200


def test_logout_requires_authentication(client):
    assert client.post(f"{USERS_URL}/logout").status_code == 401
