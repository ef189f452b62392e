import logging
from types import SimpleNamespace

from flask import Flask
from flask_cors import CORS

from .access import AccessGuard
from .cli import register_commands
from .config import Config
from .database import db
from .donation_requests import DonationRequestLifecycle
from .errors import register_error_handlers
from .identity import IdentityResolver, firebase_verifier, init_firebase
from .routes import api
from .users import UserDirectory

logger = logging.getLogger(__name__)


def create_app(config=Config, verifier=None):
    """Build the Flask app.

    ``verifier`` replaces the Firebase ID token check; it takes a token and
    returns its decoded claims.
    """
    app = Flask(__name__)
    app.config.from_object(config)

    logging.basicConfig(level=app.config["LOG_LEVEL"])

    CORS(app, supports_credentials=True, origins=[app.config["CLIENT_DOMAIN"]])

    db.init_app(app)
    with app.app_context():
        db.create_all()

    if verifier is None:
        if app.config.get("FB_SERVICE_KEY"):
            init_firebase(app.config["FB_SERVICE_KEY"])
        else:
            logger.warning("FB_SERVICE_KEY is not set; token verification will fail")
        verifier = firebase_verifier(app.config["FIREBASE_CHECK_REVOKED"])

    users = UserDirectory(db.session)
    app.extensions["bloodcare"] = SimpleNamespace(
        identity=IdentityResolver(verifier),
        guard=AccessGuard(users),
        users=users,
        donation_requests=DonationRequestLifecycle(db.session),
    )

    register_error_handlers(app)
    register_commands(app)
    app.register_blueprint(api)
    return app


if __name__ == "__main__":
    app = create_app()
    logger.info("Server is running on port %s", app.config["PORT"])
    app.run(debug=app.config["DEBUG"], host="0.0.0.0", port=app.config["PORT"])
