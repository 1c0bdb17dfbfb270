from fastapi.testclient import TestClient

from app.core.config import settings
from app.db.session import get_db
from app.main import app
from app.services.asset_store import get_asset_store
from tests.conftest import USER_API, registration_data

JPEG = ("me.jpg", b"\xff\xd8\xff\xe0fake-jpeg", "image/jpeg")


def cookie_attributes(response):
    header = response.headers["set-cookie"].lower()
    return [part.strip() for part in header.split(";")[1:]]


def login(client, **overrides):
    body = {"email": "asha@example.com", "password": "secret123", "role": "jobseeker"}
    body.update(overrides)
    return client.post(f"{USER_API}/login", json=body)


# ============== Register ==============


def test_register_creates_account(client):
    response = client.post(f"{USER_API}/register", data=registration_data())

    assert response.status_code == 201
    assert response.json() == {"success": True, "message": "Account created successfully"}


def test_register_does_not_start_a_session(client):
    response = client.post(f"{USER_API}/register", data=registration_data())

    assert "set-cookie" not in response.headers
    assert client.get(f"{USER_API}/me").status_code == 401


def test_register_then_login_returns_user_without_password(client, register_user):
    register_user()

    response = login(client)

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Welcome back Asha Rao"
    user = body["user"]
    assert user["email"] == "asha@example.com"
    assert user["phoneNumber"] == 9876543210
    assert user["role"] == "jobseeker"
    assert user["profile"]["skills"] == []
    assert "password" not in user
    assert "hashed_password" not in user
    assert "$2b$" not in response.text


def test_register_duplicate_email_any_case_conflicts(client, register_user):
    register_user()

    response = client.post(
        f"{USER_API}/register",
        data=registration_data(email="ASHA@Example.com", fullname="Someone Else"),
    )

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "User already exists"}
    # the original account is untouched
    assert login(client).json()["user"]["fullname"] == "Asha Rao"


def test_register_reports_first_invalid_field(client):
    response = client.post(
        f"{USER_API}/register",
        data=registration_data(fullname="", email="bad", password="123"),
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Full name is required"


def test_register_rejects_missing_fields(client):
    response = client.post(f"{USER_API}/register", data={"email": "asha@example.com"})

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Full name is required"}


def test_register_rejects_short_password(client):
    response = client.post(f"{USER_API}/register", data=registration_data(password="12345"))

    assert response.status_code == 400
    assert response.json()["message"] == "Password must be at least 6 characters"


def test_register_rejects_non_numeric_phone(client):
    response = client.post(f"{USER_API}/register", data=registration_data(phoneNumber="abc"))

    assert response.status_code == 400
    assert response.json()["message"] == "Phone number must be numeric"


def test_register_rejects_unknown_role(client):
    response = client.post(f"{USER_API}/register", data=registration_data(role="admin"))

    assert response.status_code == 400
    assert response.json()["message"] == "Role must be 'jobseeker' or 'recruiter'"


def test_register_uploads_profile_photo(client, asset_store, register_user):
    register_user(files={"file": JPEG})

    assert asset_store.uploads == [("profile_photos", "image", "me.jpg")]
    user = login(client).json()["user"]
    assert user["profile"]["profilePhotoUrl"] == "https://assets.test/profile_photos/1/me.jpg"


def test_register_rejects_photo_of_wrong_type(client, asset_store):
    response = client.post(
        f"{USER_API}/register",
        data=registration_data(),
        files={"file": ("me.png", b"\x89PNG", "image/png")},
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Only JPEG and WEBP images are allowed"
    assert asset_store.uploads == []


def test_register_rejects_oversized_photo(client, asset_store):
    big = b"\xff" * (settings.MAX_PHOTO_BYTES + 1)
    response = client.post(
        f"{USER_API}/register",
        data=registration_data(),
        files={"file": ("me.jpg", big, "image/jpeg")},
    )

    assert response.status_code == 400
    assert asset_store.uploads == []


def test_register_conflict_is_detected_before_upload(client, asset_store, register_user):
    register_user()

    response = client.post(
        f"{USER_API}/register",
        data=registration_data(),
        files={"file": JPEG},
    )

    assert response.status_code == 400
    assert asset_store.uploads == []


def test_register_upload_failure_persists_nothing(client, asset_store):
    asset_store.fail = True

    response = client.post(
        f"{USER_API}/register",
        data=registration_data(),
        files={"file": JPEG},
    )

    assert response.status_code == 502
    assert response.json() == {"success": False, "message": "File upload failed"}
    assert login(client).status_code == 400


def test_unexpected_error_returns_generic_envelope(session_factory):
    class BrokenStore:
        def upload(self, payload, *, folder, resource_type="image"):
            raise RuntimeError("db password is hunter2")

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_asset_store] = lambda: BrokenStore()
    try:
        client = TestClient(app, raise_server_exceptions=False)
        response = client.post(
            f"{USER_API}/register",
            data=registration_data(),
            files={"file": JPEG},
        )
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Server error"}
    assert "hunter2" not in response.text


# ============== Login ==============


def test_login_sets_session_cookie(client, register_user):
    register_user()

    response = login(client)

    cookie = response.headers["set-cookie"].lower()
    assert cookie.startswith("token=")
    assert "httponly" in cookie
    assert "max-age=86400" in cookie
    assert "path=/" in cookie
    assert "samesite=lax" in cookie
    assert "secure" not in cookie_attributes(response)
    assert response.cookies["token"]


def test_login_cookie_is_secure_over_https(client, register_user):
    register_user()
    https_client = TestClient(app, base_url="https://testserver")

    response = login(https_client)

    attributes = cookie_attributes(response)
    assert "secure" in attributes
    assert "samesite=none" in attributes


def test_login_cookie_secure_setting_overrides_scheme(client, register_user, monkeypatch):
    register_user()
    monkeypatch.setattr(settings, "COOKIE_SECURE", True)

    response = login(client)

    assert "secure" in cookie_attributes(response)


def test_login_accepts_form_body(client, register_user):
    register_user()

    response = client.post(
        f"{USER_API}/login",
        data={"email": "asha@example.com", "password": "secret123", "role": "jobseeker"},
    )

    assert response.status_code == 200


def test_login_email_is_case_insensitive(client, register_user):
    register_user()

    assert login(client, email="Asha@EXAMPLE.com").status_code == 200


def test_login_failures_are_indistinguishable(client, register_user):
    register_user()

    wrong_password = login(client, password="wrong")
    unknown_email = login(client, email="nobody@example.com")
    wrong_role = login(client, role="recruiter")

    for response in (wrong_password, unknown_email, wrong_role):
        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "Invalid credentials"}
        assert "set-cookie" not in response.headers


def test_login_requires_all_fields(client):
    response = client.post(f"{USER_API}/login", json={"email": "asha@example.com"})

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "All fields are required"}


def test_login_rejects_malformed_json(client):
    response = client.post(
        f"{USER_API}/login",
        content=b"{not json",
        headers={"content-type": "application/json"},
    )

    assert response.status_code == 400


# ============== Logout ==============


def test_logout_clears_cookie(client):
    response = client.post(f"{USER_API}/logout")

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Logged out successfully"}
    cookie = response.headers["set-cookie"].lower()
    assert cookie.startswith("token=")
    assert "max-age=0" in cookie
    assert "httponly" in cookie


def test_logout_is_idempotent(logged_in_client):
    first = logged_in_client.post(f"{USER_API}/logout")
    second = logged_in_client.post(f"{USER_API}/logout")

    assert first.status_code == second.status_code == 200
    assert first.json() == second.json()
    assert first.headers["set-cookie"] == second.headers["set-cookie"]
    assert logged_in_client.get(f"{USER_API}/me").status_code == 401


def test_stale_token_still_valid_after_logout(client, register_user):
    register_user()
    token = login(client).cookies["token"]

    client.post(f"{USER_API}/logout")
    client.cookies.set("token", token)

    assert client.get(f"{USER_API}/me").status_code == 200


# ============== Session gate ==============


def test_missing_cookie_is_401_not_500(client):
    response = client.get(f"{USER_API}/me")

    assert response.status_code == 401
    assert response.json() == {"success": False, "message": "User not authenticated"}


def test_tampered_cookie_is_401(client):
    client.cookies.set("token", "garbage.token.value")

    response = client.post(f"{USER_API}/profile/update", data={"bio": "x"})

    assert response.status_code == 401
    assert response.json()["success"] is False


def test_me_returns_current_user(logged_in_client):
    response = logged_in_client.get(f"{USER_API}/me")

    assert response.status_code == 200
    assert response.json()["user"]["email"] == "asha@example.com"


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}
