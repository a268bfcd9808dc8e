import smtplib

from mathwizard.utils import mailer as mailer_module
from mathwizard.utils.mailer import Mailer


class FakeSMTP:
    instances = []

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port
        self.started_tls = False
        self.logged_in = None
        self.messages = []
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        self.started_tls = True

    def login(self, user, password):
        self.logged_in = (user, password)

    def send_message(self, msg):
        self.messages.append(msg)


def test_disabled_without_host():
    assert Mailer(host="").send("a@example.com", "Hi", "body") is False


def test_verification_email_contains_link_and_code(monkeypatch):
    FakeSMTP.instances = []
    monkeypatch.setattr(mailer_module.smtplib, "SMTP", FakeSMTP)
    mailer = Mailer(host="smtp.test", port=587, user="u", password="p", sender="noreply@mw.test")

    assert mailer.send_verification_email("pat@example.com", "Pat", "tok-123", "654321") is True

    [smtp] = FakeSMTP.instances
    assert smtp.started_tls
    assert smtp.logged_in == ("u", "p")
    [msg] = smtp.messages
    assert msg["To"] == "pat@example.com"
    body = msg.get_body(preferencelist=("plain",)).get_content()
    assert "verify-email?token=tok-123" in body
    assert "654321" in body


def test_delivery_failure_returns_false(monkeypatch):
    def refuse(*args, **kwargs):
        raise smtplib.SMTPConnectError(421, "unavailable")

    monkeypatch.setattr(mailer_module.smtplib, "SMTP", refuse)
    assert Mailer(host="smtp.test", port=587).send("a@example.com", "Hi", "body") is False
