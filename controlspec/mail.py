"""
Mail delivery capture for controller tests.

The application's mailer is an outside collaborator; the harness only owns
its ``deliveries`` buffer. Before each controller test a fresh list is
attached to the configured mailer, so whatever an action delivers lands in
``self.deliveries``::

    self.post("create", name="Doohickey")
    self.assert_delivered(to="owner@example.com", subject="Created Doohickey")
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

logger = logging.getLogger("controlspec.mail")


def reset_deliveries(mailer: Any) -> List[Any]:
    """Attach a fresh, empty delivery buffer to *mailer* and return it."""
    deliveries: List[Any] = []
    mailer.deliveries = deliveries
    logger.debug("Reset deliveries on %r", mailer)
    return deliveries


def matches_delivery(message: Any, criteria: dict) -> bool:
    """
    True if *message* satisfies every criterion.

    A criterion names a message attribute. Collection attributes (``to``,
    ``cc``) match when they contain the value; anything else must be equal.
    """
    for name, wanted in criteria.items():
        actual = getattr(message, name, _ABSENT)
        if actual is _ABSENT:
            return False
        if isinstance(actual, (list, tuple, set, frozenset)):
            if wanted not in actual:
                return False
        elif actual != wanted:
            return False
    return True


_ABSENT = object()


class MailTestMixin:
    """Delivery assertions over the buffer the harness attached to the mailer."""

    deliveries: Optional[List[Any]] = None

    def delivered(self, **criteria: Any) -> List[Any]:
        """Messages delivered during this test that match *criteria*."""
        return [m for m in self.deliveries or () if matches_delivery(m, criteria)]

    def assert_delivered(self, count: Optional[int] = None, **criteria: Any) -> List[Any]:
        """
        Assert that matching mail was delivered (exactly *count* messages
        when given) and return the matches.
        """
        found = self.delivered(**criteria)
        wanted = "mail" if not criteria else f"mail matching {criteria!r}"
        if count is None:
            assert found, f"No {wanted} was delivered. Delivered: {self.deliveries!r}"
        else:
            assert len(found) == count, (
                f"Expected {count} {wanted}, {len(found)} delivered. "
                f"Delivered: {self.deliveries!r}"
            )
        return found

    def assert_nothing_delivered(self) -> None:
        assert not self.deliveries, f"Expected no mail, delivered: {self.deliveries!r}"
