"""End-to-end tests against an in-memory panel served through httpx.MockTransport."""

from urllib.parse import parse_qs

import httpx
import pytest

from panel_dns.errors import AuthenticationError, RecordNotFoundError, TermsNotAcceptedError
from panel_dns.models import Credentials
from panel_dns.panel.mutator import RecordMutator

_BASE = "https://panel.example.net/admin.php"
_COOKIE = "panel_sid"


class FakeStore:
    def __init__(self, credentials):
        self.credentials = credentials

    def load(self):
        return self.credentials

    def save(self, credentials):
        self.credentials = credentials


class FakePanel:
    """Mimics the admin panel: cookie login, terms gate, zone list and TXT table."""

    def __init__(self, zones=("example.com",), terms_pending=False, password="s3cret"):
        self.zones = list(zones)
        self.terms_pending = terms_pending
        self.password = password
        self.records = {}
        self.next_id = 100
        self.actions = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        action = request.url.params.get("action")
        self.actions.append(action)
        form = {k: v[0] for k, v in parse_qs(request.content.decode()).items()}

        if action == "login":
            if form.get("password") != self.password:
                return httpx.Response(200, text='<div class="login-error">Invalid login</div>')
            headers = {"set-cookie": f"{_COOKIE}=abc123; Path=/"}
            if self.terms_pending:
                return httpx.Response(200, text='<form><button name="approve_terms">Accept</button></form>', headers=headers)
            return httpx.Response(200, text='<a href="?action=logout">Log out</a>', headers=headers)

        if request.headers.get("cookie") != f"{_COOKIE}=abc123":
            return httpx.Response(200, text='<form action="?action=login">Please log in</form>')

        if action == "approve_terms":
            self.terms_pending = False
            return httpx.Response(200, text='<a href="?action=logout">Log out</a>')
        if action == "domains":
            rows = "".join(f"<tr><td>{z}</td></tr>" for z in self.zones)
            return httpx.Response(200, text=f"<table>{rows}</table>")
        if action == "dns_setup":
            zone = request.url.params["domain"]
            rows = "".join(
                f'<tr><td>{name}</td><td>{value}</td><td><a href="?action=delete_txt&domain={zone}&id={rid}">x</a></td></tr>'
                for rid, (z, name, value) in self.records.items()
                if z == zone
            )
            return httpx.Response(200, text=f"<table>{rows}</table>")
        if action == "add_txt":
            if self.terms_pending:
                return httpx.Response(200, text='<tr class="error"><td>Accept the terms first</td></tr>')
            self.records[str(self.next_id)] = (request.url.params["domain"], form["name"], form["value"])
            self.next_id += 1
            return httpx.Response(200, text='<tr class="success"><td>Record added</td></tr>')
        if action == "delete_txt":
            if self.records.pop(request.url.params["id"], None) is None:
                return httpx.Response(200, text='<tr class="error"><td>No such record</td></tr>')
            return httpx.Response(200, text='<tr class="success"><td>Record deleted</td></tr>')
        return httpx.Response(404, text="unknown action")


def _mutator(panel, password="s3cret"):
    client = httpx.Client(transport=httpx.MockTransport(panel.handler), follow_redirects=True)
    store = FakeStore(Credentials(username="alice", password=password))
    return RecordMutator(_BASE, store, _http_client=client)


def test_create_then_delete_round_trip():
    panel = FakePanel(zones=["example.com", "example.org"])

    with _mutator(panel) as mutator:
        mutator.create("www.example.com", "_acme-challenge.www", "challenge-token")
        assert list(panel.records.values()) == [("example.com", "_acme-challenge.www", "challenge-token")]

        mutator.delete("www.example.com", "_acme-challenge.www", "challenge-token")

    assert panel.records == {}
    assert panel.actions == [
        "login", "domains", "add_txt",
        "login", "domains", "dns_setup", "delete_txt",
    ]


def test_second_delete_reports_record_not_found():
    panel = FakePanel()

    with _mutator(panel) as mutator:
        mutator.create("www.example.com", "_acme-challenge.www", "challenge-token")
        mutator.delete("www.example.com", "_acme-challenge.www", "challenge-token")

        with pytest.raises(RecordNotFoundError):
            mutator.delete("www.example.com", "_acme-challenge.www", "challenge-token")

    assert panel.actions.count("delete_txt") == 1


def test_pending_terms_are_approved_before_creating():
    panel = FakePanel(terms_pending=True)

    with _mutator(panel) as mutator:
        mutator.create("www.example.com", "_acme-challenge.www", "challenge-token")

    assert panel.actions[:2] == ["login", "approve_terms"]
    assert len(panel.records) == 1


def test_declined_terms_never_approve():
    panel = FakePanel(terms_pending=True)

    with _mutator(panel) as mutator, pytest.raises(TermsNotAcceptedError):
        mutator.create("www.example.com", "_acme-challenge.www", "challenge-token", accept_terms=False)

    assert panel.actions == ["login"]
    assert panel.terms_pending


def test_wrong_password_fails_login():
    panel = FakePanel()

    with _mutator(panel, password="wrong") as mutator, pytest.raises(AuthenticationError):
        mutator.create("www.example.com", "_acme-challenge.www", "challenge-token")

    assert panel.records == {}
