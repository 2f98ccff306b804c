"""
Tests for controlspec.mail - delivery buffer and delivery assertions.
"""

import pytest

from controlspec.mail import MailTestMixin, matches_delivery, reset_deliveries

import sampleapp
from sampleapp import Message


class _Inbox(MailTestMixin):

    def __init__(self, deliveries=None):
        self.deliveries = deliveries


@pytest.fixture
def inbox():
    return _Inbox([
        Message(to=["alice@example.com"], subject="Welcome"),
        Message(to=["bob@example.com", "carol@example.com"], subject="Digest"),
        Message(to=["alice@example.com"], subject="Digest"),
    ])


class TestResetDeliveries:

    def test_fresh_list_attached(self):
        mailer = sampleapp.Mailer()
        mailer.deliver(to="x@example.com", subject="old")
        deliveries = reset_deliveries(mailer)
        assert deliveries == []
        assert mailer.deliveries is deliveries
        mailer.deliver(to="x@example.com", subject="new")
        assert [m.subject for m in deliveries] == ["new"]

    def test_fixture(self, mail_deliveries):
        assert mail_deliveries == []
        sampleapp.mailer.deliver(to="x@example.com", subject="fixture")
        assert len(mail_deliveries) == 1


class TestMatchesDelivery:

    def test_collection_attribute_contains(self):
        message = Message(to=["bob@example.com", "carol@example.com"], subject="Digest")
        assert matches_delivery(message, {"to": "carol@example.com"})
        assert not matches_delivery(message, {"to": "dave@example.com"})

    def test_scalar_attribute_equal(self):
        message = Message(to=["a@example.com"], subject="Digest")
        assert matches_delivery(message, {"subject": "Digest", "body": ""})
        assert not matches_delivery(message, {"subject": "Dig"})

    def test_unknown_attribute_never_matches(self):
        assert not matches_delivery(Message(to=[], subject="x"), {"priority": "high"})

    def test_no_criteria_matches(self):
        assert matches_delivery(Message(to=[], subject="x"), {})


class TestMailTestMixin:

    def test_delivered(self, inbox):
        assert len(inbox.delivered()) == 3
        assert [m.subject for m in inbox.delivered(to="alice@example.com")] == ["Welcome", "Digest"]
        assert inbox.delivered(to="alice@example.com", subject="Digest") == [inbox.deliveries[2]]

    def test_without_buffer(self):
        empty = _Inbox()
        assert empty.delivered() == []
        empty.assert_nothing_delivered()
        with pytest.raises(AssertionError, match="No mail was delivered"):
            empty.assert_delivered()

    def test_assert_delivered_returns_matches(self, inbox):
        found = inbox.assert_delivered(to="bob@example.com")
        assert found == [inbox.deliveries[1]]

    def test_assert_delivered_count(self, inbox):
        inbox.assert_delivered(count=3)
        inbox.assert_delivered(count=2, subject="Digest")
        inbox.assert_delivered(count=0, to="dave@example.com")
        with pytest.raises(AssertionError, match="Expected 1 mail matching"):
            inbox.assert_delivered(count=1, subject="Digest")

    def test_assert_delivered_fails_without_match(self, inbox):
        with pytest.raises(AssertionError, match="No mail matching"):
            inbox.assert_delivered(to="dave@example.com")

    def test_assert_nothing_delivered_fails(self, inbox):
        with pytest.raises(AssertionError, match="Expected no mail"):
            inbox.assert_nothing_delivered()
