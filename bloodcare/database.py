import uuid
from datetime import datetime, timezone

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

ROLES = ("donor", "volunteer", "admin")
USER_STATUSES = ("active", "blocked")
DONATION_STATUSES = ("pending", "inprogress", "done", "canceled")


def utcnow():
    return datetime.now(timezone.utc)


def new_id():
    return str(uuid.uuid4())


def _iso(value):
    return value.isoformat() if value else None


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    email = db.Column(db.String(120), unique=True, nullable=False)
    name = db.Column(db.String(100))
    avatar = db.Column(db.String(500))
    blood_group = db.Column(db.String(5))
    district = db.Column(db.String(100))
    upazila = db.Column(db.String(100))
    role = db.Column(db.String(20), nullable=False, default="donor")
    status = db.Column(db.String(20), nullable=False, default="active")
    created_at = db.Column(db.DateTime, default=utcnow)
    last_logged_in = db.Column(db.DateTime, default=utcnow)

    def to_dict(self):
        return {
            "_id": self.id,
            "email": self.email,
            "name": self.name,
            "avatar": self.avatar,
            "bloodGroup": self.blood_group,
            "district": self.district,
            "upazila": self.upazila,
            "role": self.role,
            "status": self.status,
            "createdAt": _iso(self.created_at),
            "lastLoggedIn": _iso(self.last_logged_in),
        }

    def __repr__(self):
        return f"<User {self.email} ({self.role}, {self.status})>"


class DonationRequest(db.Model):
    __tablename__ = "donation_requests"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    requester_name = db.Column(db.String(100))
    requester_email = db.Column(db.String(120), nullable=False, index=True)
    recipient_name = db.Column(db.String(100))
    recipient_district = db.Column(db.String(100))
    recipient_upazila = db.Column(db.String(100))
    hospital_name = db.Column(db.String(200))
    full_address = db.Column(db.Text)
    blood_group = db.Column(db.String(5))
    donation_date = db.Column(db.String(20))
    donation_time = db.Column(db.String(20))
    request_message = db.Column(db.Text)
    donor_name = db.Column(db.String(100))
    donor_email = db.Column(db.String(120), index=True)
    donation_status = db.Column(db.String(20), nullable=False, default="pending")
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow)

    def to_dict(self):
        return {
            "_id": self.id,
            "requesterName": self.requester_name,
            "requesterEmail": self.requester_email,
            "recipientName": self.recipient_name,
            "recipientDistrict": self.recipient_district,
            "recipientUpazila": self.recipient_upazila,
            "hospitalName": self.hospital_name,
            "fullAddress": self.full_address,
            "bloodGroup": self.blood_group,
            "donationDate": self.donation_date,
            "donationTime": self.donation_time,
            "requestMessage": self.request_message,
            "donorName": self.donor_name,
            "donorEmail": self.donor_email,
            "donationStatus": self.donation_status,
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }

    def __repr__(self):
        return f"<DonationRequest {self.id} - {self.donation_status}>"
