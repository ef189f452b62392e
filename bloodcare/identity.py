"""Bearer credential verification through Firebase Authentication."""
import base64
import json
import logging

import firebase_admin
from firebase_admin import auth, credentials, exceptions

from .errors import Unauthenticated

logger = logging.getLogger(__name__)


def init_firebase(service_key):
    """Initialize the default Firebase app from a base64 service account."""
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass
    decoded = base64.b64decode(service_key).decode("utf-8")
    cred = credentials.Certificate(json.loads(decoded))
    app = firebase_admin.initialize_app(cred)
    logger.info("Firebase app initialized for project %s", app.project_id)
    return app


def firebase_verifier(check_revoked=False):
    def verify(token):
        return auth.verify_id_token(token, check_revoked=check_revoked)
    return verify


def bearer_token(authorization_header):
    if not authorization_header:
        return None
    parts = authorization_header.split(" ")
    if len(parts) < 2:
        return None
    return parts[1] or None


class IdentityResolver:
    """Turns an Authorization header into the verified principal email.

    ``verifier`` takes the raw token and returns the decoded claims, raising
    on any verification failure. It defaults to Firebase's ID token check.
    """

    def __init__(self, verifier=None):
        self.verifier = verifier or firebase_verifier()

    def resolve(self, authorization_header):
        token = bearer_token(authorization_header)
        if not token:
            raise Unauthenticated()
        try:
            decoded = self.verifier(token)
        except (ValueError, exceptions.FirebaseError) as e:
            logger.warning("Token verification failed: %s", e)
            raise Unauthenticated(err=str(e))
        email = decoded.get("email") if decoded else None
        if not email:
            logger.warning("Verified token carries no email claim")
            raise Unauthenticated(err="Token has no email claim")
        return email
