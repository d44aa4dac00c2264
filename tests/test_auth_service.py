"""
Тесты вызовов эндпоинтов /auth.
"""
import pytest

from expense_tracker.models import LoginRequest, ProfileUpdate, RegisterRequest
from expense_tracker.services import auth_service
from expense_tracker.utils.exceptions import ApiError

from conftest import make_response

USER_JSON = {"_id": "u1", "fullName": "Alice", "email": "alice@example.com", "profileImageUrl": ""}


def test_login_posts_credentials(api_client, http_session):
    http_session.request.return_value = make_response({"success": True, "user": USER_JSON, "token": "tok"})

    response = auth_service.login(api_client, LoginRequest(email="alice@example.com", password="secret"))

    args, kwargs = http_session.request.call_args
    assert args == ("POST", "http://api.test/api/v1/auth/login")
    assert kwargs["json"] == {"email": "alice@example.com", "password": "secret"}
    assert response.token == "tok"
    assert response.user.id == "u1"
    assert response.user.profile_image_url is None


def test_login_without_token_is_api_error(api_client, http_session):
    http_session.request.return_value = make_response({"success": True, "user": USER_JSON})

    with pytest.raises(ApiError):
        auth_service.login(api_client, LoginRequest(email="alice@example.com", password="secret"))


def test_register_sends_camel_case(api_client, http_session):
    http_session.request.return_value = make_response({"success": True, "user": USER_JSON, "token": "tok"})

    auth_service.register(api_client, RegisterRequest(
        full_name="Alice", email="alice@example.com", password="secret1",
        profile_image_url="http://img.test/a.png",
    ))

    _, kwargs = http_session.request.call_args
    assert kwargs["json"] == {
        "fullName": "Alice",
        "email": "alice@example.com",
        "password": "secret1",
        "profileImageUrl": "http://img.test/a.png",
    }


def test_get_user(api_client, http_session):
    http_session.request.return_value = make_response({"success": True, "user": USER_JSON})

    user = auth_service.get_user(api_client)

    assert http_session.request.call_args.args == ("GET", "http://api.test/api/v1/auth/getuser")
    assert user.full_name == "Alice"


def test_get_user_without_user_is_api_error(api_client, http_session):
    http_session.request.return_value = make_response({"success": True})

    with pytest.raises(ApiError):
        auth_service.get_user(api_client)


def test_upload_image_sends_multipart(api_client, http_session, tmp_path):
    image = tmp_path / "avatar.png"
    image.write_bytes(b"\x89PNG")
    http_session.request.return_value = make_response({"success": True, "imageUrl": "http://img.test/1.png"})

    url = auth_service.upload_image(api_client, str(image))

    _, kwargs = http_session.request.call_args
    file_name, _, content_type = kwargs["files"]["image"]
    assert url == "http://img.test/1.png"
    assert file_name == "avatar.png"
    assert content_type == "image/png"


def test_upload_image_missing_file(api_client, tmp_path):
    with pytest.raises(OSError):
        auth_service.upload_image(api_client, str(tmp_path / "missing.png"))


def test_upload_image_without_url_is_api_error(api_client, http_session, tmp_path):
    image = tmp_path / "avatar.jpg"
    image.write_bytes(b"data")
    http_session.request.return_value = make_response({"success": True})

    with pytest.raises(ApiError):
        auth_service.upload_image(api_client, str(image))


def test_update_profile_sends_only_given_fields(api_client, http_session):
    http_session.request.return_value = make_response(
        {"success": True, "user": {**USER_JSON, "fullName": "Alice B."}}
    )

    user = auth_service.update_profile(api_client, ProfileUpdate(full_name="Alice B."))

    args, kwargs = http_session.request.call_args
    assert args == ("PUT", "http://api.test/api/v1/auth/update-profile")
    assert kwargs["json"] == {"fullName": "Alice B."}
    assert user.full_name == "Alice B."
