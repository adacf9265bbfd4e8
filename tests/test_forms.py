import pytest

from logingate.forms import parse_login_form, safe_redirect_target, validate_credentials


def form(**overrides):
    data = {
        "loginType": "login",
        "username": "alice",
        "email": "",
        "password": "s3cret!",
        "redirectTo": "/",
    }
    data.update(overrides)
    return data


def test_valid_form_without_email():
    f = parse_login_form(form())
    assert f.valid
    assert f.email is None
    assert f.login_type == "login"
    assert f.redirect_to == "/"
    assert f.credentials().username == "alice"


def test_field_errors_are_scoped():
    f = parse_login_form(form(username="al", password="123", email="broken"))
    assert not f.valid
    assert set(f.field_errors) == {"username", "email", "password"}
    assert f.field_errors["email"] == "Invalid email"


def test_missing_redirect_defaults_to_root():
    data = form()
    del data["redirectTo"]
    assert parse_login_form(data).redirect_to == "/"


@pytest.mark.parametrize(
    "value,expected",
    [
        ("/profile?tab=1", "/profile?tab=1"),
        ("", "/"),
        (None, "/"),
        ("https://evil.example/", "/"),
        ("//evil.example/", "/"),
        ("/\\evil.example", "/"),
    ],
)
def test_safe_redirect_target(value, expected):
    assert safe_redirect_target(value) == expected


def test_validate_credentials_ok():
    assert validate_credentials("bob", "bob@example.com", "hunter22") == {}
