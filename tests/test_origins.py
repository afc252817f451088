import pytest

from app.core.config import DEFAULT_ALLOWED_ORIGINS, DEFAULT_ORIGIN_PATTERNS
from app.core.origins import is_origin_allowed


@pytest.mark.parametrize(
    "origin,allowed",
    [
        (None, True),
        ("", True),
        ("https://loanbaazar.in", True),
        ("https://www.loanbaazar.in", True),
        ("https://foo.up.railway.app", True),
        ("https://my-app.vercel.app", True),
        ("https://evil.example.com", False),
        ("http://foo.up.railway.app", False),
        ("https://foo.up.railway.app.evil.com", False),
        ("https://loanbaazar.in.evil.com", False),
    ],
)
def test_origin_policy(origin, allowed):
    assert is_origin_allowed(origin, DEFAULT_ALLOWED_ORIGINS, DEFAULT_ORIGIN_PATTERNS) is allowed


def test_denied_origin_never_reaches_routes(client, db, contact_payload):
    from app.db.models.contact import ContactSubmission

    response = client.post(
        "/api/contact",
        json=contact_payload,
        headers={"Origin": "https://evil.example.com"},
    )

    assert response.status_code == 403
    assert db.query(ContactSubmission).count() == 0


def test_allowed_origin_gets_cors_headers(client):
    response = client.get("/api/health", headers={"Origin": "https://foo.up.railway.app"})

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "https://foo.up.railway.app"


def test_preflight_from_allowed_origin(client):
    response = client.options(
        "/api/admin/contacts",
        headers={
            "Origin": "https://loanbaazar.in",
            "Access-Control-Request-Method": "GET",
            "Access-Control-Request-Headers": "authorization",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "https://loanbaazar.in"
