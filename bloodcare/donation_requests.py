"""Donation request lifecycle.

Status moves ``pending -> inprogress`` when a donor commits, and between any
of ``pending``, ``inprogress``, ``done`` and ``canceled`` through an explicit
status update. Terminal states can be reverted by that update. Logistics edits
and deletion belong to the original requester.
"""
import logging

from .database import DonationRequest, utcnow
from .errors import Forbidden, InvalidCommand
from .filters import donation_request_filter, pending_filter

logger = logging.getLogger(__name__)


class DonationRequestLifecycle:
    def __init__(self, session, clock=utcnow):
        self.session = session
        self.clock = clock

    def get(self, request_id):
        return self.session.get(DonationRequest, request_id)

    def create(self, requester_email, command):
        now = self.clock()
        status = "inprogress" if command.donor_email else "pending"
        donation_request = DonationRequest(
            requester_email=requester_email,
            donation_status=status,
            created_at=now,
            updated_at=now,
            **command.values(),
        )
        self.session.add(donation_request)
        self.session.commit()
        logger.info("Donation request %s created by %s (%s)",
                    donation_request.id, requester_email, status)
        return {"acknowledged": True, "insertedId": donation_request.id}

    def commit(self, request_id, command):
        """Attach a donor and mark the request in progress, whatever its state."""
        logger.info("Donor %s committed to request %s", command.donor_email, request_id)
        return self._update(request_id, {
            "donor_name": command.donor_name,
            "donor_email": command.donor_email,
            "donation_status": "inprogress",
        })

    def set_status(self, request_id, command):
        """Move a request to any enumerated status.

        ``pending`` detaches the donor. ``inprogress`` needs a donor already
        attached; donors only attach through ``commit``.
        """
        donation_request = self.get(request_id)
        if donation_request is None:
            return {"acknowledged": True, "matchedCount": 0, "modifiedCount": 0}
        values = command.values()
        if command.donation_status == "pending":
            values.update(donor_name=None, donor_email=None)
        elif command.donation_status == "inprogress" and not donation_request.donor_email:
            raise InvalidCommand("A request without a donor cannot be in progress")
        logger.info("Request %s status -> %s", request_id, command.donation_status)
        return self._update(request_id, values)

    def edit(self, request_id, requester_email, command):
        donation_request = self.get(request_id)
        if donation_request is None:
            return {"acknowledged": True, "matchedCount": 0, "modifiedCount": 0}
        if donation_request.requester_email != requester_email:
            raise Forbidden(email=requester_email)
        return self._update(request_id, command.values())

    def delete(self, request_id, caller_email, principal_email):
        if caller_email != principal_email:
            raise Forbidden(email=principal_email)
        donation_request = self.get(request_id)
        if donation_request is None:
            return {"acknowledged": True, "deletedCount": 0}
        if donation_request.requester_email != principal_email:
            raise Forbidden(email=principal_email)
        self.session.delete(donation_request)
        self.session.commit()
        logger.info("Donation request %s deleted by %s", request_id, principal_email)
        return {"acknowledged": True, "deletedCount": 1}

    def list_public_pending(self):
        return self._find(pending_filter())

    def list_requests(self, email=None, status=None):
        return self._find(donation_request_filter("requester_email", email, status))

    def list_donations(self, email, status=None):
        if not email:
            return []
        return self._find(donation_request_filter("donor_email", email, status, always_sort=True))

    def count(self):
        return self.session.query(DonationRequest).count()

    def _find(self, search):
        return search.apply(self.session.query(DonationRequest), DonationRequest).all()

    def _update(self, request_id, values):
        values["updated_at"] = self.clock()
        matched = self.session.query(DonationRequest).filter(
            DonationRequest.id == request_id
        ).update(values, synchronize_session="fetch")
        self.session.commit()
        return {"acknowledged": True, "matchedCount": matched, "modifiedCount": matched}
