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


def test_contact_page_renders_empty_form():
    client, _ = make_client()
    resp = client.get("/contact")
    assert resp.status_code == 200
    assert '<form method="post" action="/contact"' in resp.text
    assert 'name="name" type="text" value=""' in resp.text


def test_successful_submission_clears_form():
    client, sender = make_client()
    resp = client.post("/contact", data=JANE)

    assert resp.status_code == 200
    assert "Your message has been sent" in resp.text
    assert 'name="email" type="email" value=""' in resp.text
    assert len(sender.sent) == 1
    assert sender.sent[0].email == "jane@x.com"


def test_validation_failure_echoes_input():
    client, sender = make_client()
    resp = client.post("/contact", data={**JANE, "name": ""})

    assert resp.status_code == 400
    assert "Name is required" in resp.text
    assert 'name="mobile" type="tel" value="123"' in resp.text
    assert 'name="email" type="email" value="jane@x.com"' in resp.text
    assert ">Hi</textarea>" in resp.text
    assert sender.sent == []


def test_missing_fields_are_treated_as_empty():
    client, _ = make_client()
    resp = client.post("/contact", data={})
    assert resp.status_code == 400
    for message in ("Name is required", "Mobile is required", "Email is required", "Please enter a message"):
        assert message in resp.text


def test_echoed_values_are_escaped():
    client, _ = make_client()
    resp = client.post("/contact", data={**JANE, "email": "", "name": '"><script>x</script>'})
    assert resp.status_code == 400
    assert "<script>x</script>" not in resp.text
    assert "&lt;script&gt;" in resp.text


def test_delivery_failure_shows_general_error():
    client, _ = make_client(sender=FakeSender(error=DeliveryError("smtp down")))
    resp = client.post("/contact", data=JANE)

    assert resp.status_code == 200
    assert "Failed to send message. Please try again or contact me directly." in resp.text
    assert 'name="name" type="text" value="Jane"' in resp.text


def test_sixth_submission_is_rate_limited():
    client, sender = make_client()
    for _ in range(5):
        assert client.post("/contact", data=JANE).status_code == 200

    resp = client.post("/contact", data=JANE)
    assert resp.status_code == 429
    assert "Too many contact form submissions, please try again later." in resp.text
    assert int(resp.headers["Retry-After"]) > 0
    assert 'name="name" type="text" value=""' in resp.text
    assert len(sender.sent) == 5


def test_rate_limit_does_not_block_page_views():
    client, _ = make_client(max_attempts=1)
    client.post("/contact", data=JANE)
    assert client.post("/contact", data=JANE).status_code == 429
    assert client.get("/contact").status_code == 200


def test_injected_collaborators_are_used():
    sender = FakeSender()
    limiter = RateLimiter(window_seconds=60, max_attempts=1)
    app = create_app(sender=sender, limiter=limiter)

    assert app.state.pipeline.limiter is limiter
    assert app.state.pipeline.sender is sender


def test_wrong_method_renders_a_page():
    client, _ = make_client()
    resp = client.put("/contact", data={})
    assert resp.status_code == 405
    assert resp.headers["content-type"].startswith("text/html")
    assert "Page not found" in resp.text
