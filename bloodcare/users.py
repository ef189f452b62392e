"""User directory: login sync, profile edits and admin moderation."""
import logging

from sqlalchemy.exc import IntegrityError

from .database import ROLES, USER_STATUSES, User, utcnow
from .errors import InvalidCommand

logger = logging.getLogger(__name__)


class UserDirectory:
    def __init__(self, session, clock=utcnow):
        self.session = session
        self.clock = clock

    def get_user(self, email):
        return self.session.query(User).filter_by(email=email).first()

    def sync_login(self, command):
        """Create the user on first sign-in, otherwise just touch lastLoggedIn.

        Role and status come only from the creation defaults here; repeated
        calls never change them.
        """
        now = self.clock()
        if self.get_user(command.email) is not None:
            return self._touch_login(command.email, now)

        user = User(
            role="donor",
            status="active",
            created_at=now,
            last_logged_in=now,
            **command.values(),
        )
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError:
            # Lost a race against a concurrent first login for this email.
            self.session.rollback()
            return self._touch_login(command.email, now)
        logger.info("Created user %s", user.email)
        return {"acknowledged": True, "insertedId": user.id}

    def _touch_login(self, email, now):
        matched = self.session.query(User).filter_by(email=email).update(
            {User.last_logged_in: now}, synchronize_session="fetch"
        )
        self.session.commit()
        return {"acknowledged": True, "matchedCount": matched, "modifiedCount": matched}

    def get_status(self, email):
        user = self.get_user(email)
        return {"status": user.status} if user else None

    def get_blood_type(self, email):
        user = self.get_user(email)
        return {"bloodGroup": user.blood_group} if user else None

    def get_role(self, email):
        user = self.get_user(email)
        return user.role if user else None

    def update_profile(self, email, command):
        return self._update(User.email == email, command.values())

    def list_donors(self, search):
        return search.apply(self.session.query(User), User).all()

    def list_all(self, exclude_email):
        return self.session.query(User).filter(User.email != exclude_email).all()

    def set_status(self, user_id, status):
        if status not in USER_STATUSES:
            raise InvalidCommand(f"Unknown user status: {status}")
        logger.info("Setting status of user %s to %s", user_id, status)
        return self._update(User.id == user_id, {"status": status})

    def set_role(self, user_id, role):
        if role not in ROLES:
            raise InvalidCommand(f"Unknown role: {role}")
        logger.info("Setting role of user %s to %s", user_id, role)
        return self._update(User.id == user_id, {"role": role})

    def count(self):
        return self.session.query(User).count()

    def _update(self, criterion, values):
        matched = self.session.query(User).filter(criterion).update(
            values, synchronize_session="fetch"
        )
        self.session.commit()
        return {"acknowledged": True, "matchedCount": matched, "modifiedCount": matched}
