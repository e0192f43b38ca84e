from fastapi.testclient import TestClient

from portfolio.core.mailer import DeliveryError
from portfolio.core.rate_limit import RateLimiter
from portfolio.main import create_app

JANE = {"name": "Jane", "mobile": "123", "email": "jane@x.com", "message": "Hi"}


class FakeSender:
    def __init__(self, error: Exception | None = None):
        self.sent = []
        self.error = error

    def send(self, submission):
        if self.error:
            raise self.error
        self.sent.append(submission)


def make_client(sender=None, max_attempts=5):
    sender = sender or FakeSender()
    limiter = RateLimiter(window_seconds=900, max_attempts=max_attempts)
    return TestClient(create_app(sender=sender, limiter=limiter)), sender


def test_api_contact_sends():
    client, sender = make_client()
    resp = client.post("/api/contact", json=JANE)

    assert resp.status_code == 200
    assert resp.json() == {"success": True, "message": "Message sent successfully!"}
    assert sender.sent[0].name == "Jane"


def test_api_contact_returns_field_errors():
    client, sender = make_client()
    resp = client.post("/api/contact", json={**JANE, "email": "nope", "message": " "})

    assert resp.status_code == 400
    assert resp.json() == {"errors": {"email": "Email is invalid", "message": "Please enter a message"}}
    assert sender.sent == []


def test_api_contact_missing_fields_are_empty():
    client, _ = make_client()
    resp = client.post("/api/contact", json={})
    assert resp.status_code == 400
    assert set(resp.json()["errors"]) == {"name", "mobile", "email", "message"}


def test_api_contact_delivery_failure_is_500():
    client, _ = make_client(sender=FakeSender(error=DeliveryError("smtp down")))
    resp = client.post("/api/contact", json=JANE)

    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to send message. Please try again."}


def test_api_contact_is_rate_limited():
    client, sender = make_client(max_attempts=1)
    assert client.post("/api/contact", json=JANE).status_code == 200

    resp = client.post("/api/contact", json=JANE)
    assert resp.status_code == 429
    assert resp.json()["error"] == "Too many contact form submissions, please try again later."
    assert int(resp.headers["Retry-After"]) > 0
    assert len(sender.sent) == 1


def test_api_shares_the_limiter_with_the_form():
    client, _ = make_client(max_attempts=1)
    assert client.post("/contact", data=JANE).status_code == 200
    assert client.post("/api/contact", json=JANE).status_code == 429


def test_api_contact_rejects_get_with_json():
    client, _ = make_client()
    resp = client.get("/api/contact")
    assert resp.status_code == 405
    assert resp.headers["content-type"] == "application/json"
