"""Typed command objects built from JSON request bodies.

Each ``from_payload`` picks out the fields its action may touch, so the
services never merge arbitrary client keys into a record.
"""
from dataclasses import dataclass, fields
from typing import Optional

from .database import DONATION_STATUSES
from .errors import InvalidCommand

LOGISTICS_FIELDS = {
    "recipientName": "recipient_name",
    "recipientDistrict": "recipient_district",
    "recipientUpazila": "recipient_upazila",
    "hospitalName": "hospital_name",
    "fullAddress": "full_address",
    "bloodGroup": "blood_group",
    "donationDate": "donation_date",
    "donationTime": "donation_time",
    "requestMessage": "request_message",
}

PROFILE_FIELDS = {
    "name": "name",
    "avatar": "avatar",
    "bloodGroup": "blood_group",
    "district": "district",
    "upazila": "upazila",
}


def _require_object(payload):
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise InvalidCommand("Request body must be a JSON object")
    return payload


def _pick(payload, mapping):
    return {attr: payload.get(key) for key, attr in mapping.items()}


class _Command:
    def values(self):
        """Column name -> value for every field of the command."""
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass
class LoginSyncCommand(_Command):
    email: str
    name: Optional[str] = None
    avatar: Optional[str] = None
    blood_group: Optional[str] = None
    district: Optional[str] = None
    upazila: Optional[str] = None

    @classmethod
    def from_payload(cls, payload, email):
        payload = _require_object(payload)
        return cls(email=email, **_pick(payload, PROFILE_FIELDS))


@dataclass
class ProfileUpdateCommand(_Command):
    name: Optional[str] = None
    avatar: Optional[str] = None
    blood_group: Optional[str] = None
    district: Optional[str] = None
    upazila: Optional[str] = None

    @classmethod
    def from_payload(cls, payload):
        return cls(**_pick(_require_object(payload), PROFILE_FIELDS))


@dataclass
class EditRequestCommand(_Command):
    recipient_name: Optional[str] = None
    recipient_district: Optional[str] = None
    recipient_upazila: Optional[str] = None
    hospital_name: Optional[str] = None
    full_address: Optional[str] = None
    blood_group: Optional[str] = None
    donation_date: Optional[str] = None
    donation_time: Optional[str] = None
    request_message: Optional[str] = None

    @classmethod
    def from_payload(cls, payload):
        return cls(**_pick(_require_object(payload), LOGISTICS_FIELDS))


@dataclass
class CreateRequestCommand(EditRequestCommand):
    requester_name: Optional[str] = None
    donor_name: Optional[str] = None
    donor_email: Optional[str] = None

    @classmethod
    def from_payload(cls, payload):
        payload = _require_object(payload)
        return cls(
            requester_name=payload.get("requesterName"),
            donor_name=payload.get("donorName"),
            donor_email=payload.get("donorEmail") or None,
            **_pick(payload, LOGISTICS_FIELDS),
        )


@dataclass
class CommitDonorCommand(_Command):
    donor_name: Optional[str]
    donor_email: str

    @classmethod
    def from_payload(cls, payload):
        payload = _require_object(payload)
        email = payload.get("email")
        if not email:
            raise InvalidCommand("Donor email is required")
        return cls(donor_name=payload.get("name"), donor_email=email)


@dataclass
class StatusUpdateCommand(_Command):
    donation_status: str

    @classmethod
    def from_payload(cls, payload):
        status = _require_object(payload).get("donationStatus")
        if status not in DONATION_STATUSES:
            raise InvalidCommand(
                f"donationStatus must be one of {', '.join(DONATION_STATUSES)}"
            )
        return cls(donation_status=status)
