from flask import Blueprint, jsonify, request

from .access import role_required, services, token_required
from .commands import (
    CommitDonorCommand,
    CreateRequestCommand,
    EditRequestCommand,
    LoginSyncCommand,
    ProfileUpdateCommand,
    StatusUpdateCommand,
)
from .filters import donor_filter

api = Blueprint("api", __name__)


def _dicts(records):
    return jsonify([r.to_dict() for r in records])


@api.route("/")
def home():
    return "Welcome to BloodCare server!"


# ------------------------- #
# Public
# ------------------------- #
@api.route("/users/check-status/<email>", methods=["GET"])
def check_status(email):
    return jsonify(services().users.get_status(email))


@api.route("/bloodType/<email>", methods=["GET"])
def blood_type(email):
    return jsonify(services().users.get_blood_type(email))


@api.route("/users/donors", methods=["GET"])
def search_donors():
    search = donor_filter(
        blood=request.args.get("blood"),
        district=request.args.get("district"),
        upazila=request.args.get("upazila"),
        current_user=request.args.get("currentUser"),
    )
    return _dicts(services().users.list_donors(search))


@api.route("/donation-requests/public", methods=["GET"])
def public_donation_requests():
    return _dicts(services().donation_requests.list_public_pending())


@api.route("/donation-requests/<request_id>", methods=["GET"])
def get_donation_request(request_id):
    donation_request = services().donation_requests.get(request_id)
    return jsonify(donation_request.to_dict() if donation_request else None)


@api.route("/donate/<request_id>", methods=["PATCH"])
def donate(request_id):
    command = CommitDonorCommand.from_payload(request.get_json(silent=True))
    return jsonify(services().donation_requests.commit(request_id, command))


# ------------------------- #
# Authenticated
# ------------------------- #
@api.route("/users", methods=["POST"])
@token_required
def sync_user(auth_ctx):
    command = LoginSyncCommand.from_payload(request.get_json(silent=True), auth_ctx.email)
    return jsonify(services().users.sync_login(command))


@api.route("/users/<email>", methods=["GET"])
@token_required
def get_user(auth_ctx, email):
    user = services().users.get_user(email)
    return jsonify(user.to_dict() if user else None)


@api.route("/users/update/<email>", methods=["PATCH"])
@token_required
def update_profile(auth_ctx, email):
    svc = services()
    svc.guard.require_self(auth_ctx, email)
    command = ProfileUpdateCommand.from_payload(request.get_json(silent=True))
    return jsonify(svc.users.update_profile(email, command))


@api.route("/user/role", methods=["GET"])
@token_required
def own_role(auth_ctx):
    return jsonify({"role": services().users.get_role(auth_ctx.email)})


@api.route("/application-stats", methods=["GET"])
@token_required
def application_stats(auth_ctx):
    svc = services()
    return jsonify({
        "totalUsers": svc.users.count(),
        "totalDonationRequest": svc.donation_requests.count(),
    })


@api.route("/donation-requests", methods=["POST"])
@token_required
def create_donation_request(auth_ctx):
    command = CreateRequestCommand.from_payload(request.get_json(silent=True))
    return jsonify(services().donation_requests.create(auth_ctx.email, command))


@api.route("/donation-requests", methods=["GET"])
@token_required
def list_donation_requests(auth_ctx):
    records = services().donation_requests.list_requests(
        email=request.args.get("email"),
        status=request.args.get("statusFilter"),
    )
    return _dicts(records)


@api.route("/donations", methods=["GET"])
@token_required
def list_donations(auth_ctx):
    records = services().donation_requests.list_donations(
        email=request.args.get("email"),
        status=request.args.get("statusFilter"),
    )
    return _dicts(records)


@api.route("/update-donation-status/<request_id>", methods=["PATCH"])
@token_required
def update_donation_status(auth_ctx, request_id):
    command = StatusUpdateCommand.from_payload(request.get_json(silent=True))
    return jsonify(services().donation_requests.set_status(request_id, command))


@api.route("/donation-requests/edit/<request_id>", methods=["PATCH"])
@token_required
def edit_donation_request(auth_ctx, request_id):
    command = EditRequestCommand.from_payload(request.get_json(silent=True))
    return jsonify(services().donation_requests.edit(request_id, auth_ctx.email, command))


@api.route("/donation-requests/delete/<request_id>", methods=["DELETE"])
@token_required
def delete_donation_request(auth_ctx, request_id):
    result = services().donation_requests.delete(
        request_id, request.args.get("email"), auth_ctx.email
    )
    return jsonify(result)


# ------------------------- #
# Admin
# ------------------------- #
@api.route("/users", methods=["GET"])
@role_required("admin")
def list_users(auth_ctx):
    return _dicts(services().users.list_all(auth_ctx.email))


@api.route("/users/block/<user_id>", methods=["PATCH"])
@role_required("admin")
def block_user(auth_ctx, user_id):
    return jsonify(services().users.set_status(user_id, "blocked"))


@api.route("/users/unblock/<user_id>", methods=["PATCH"])
@role_required("admin")
def unblock_user(auth_ctx, user_id):
    return jsonify(services().users.set_status(user_id, "active"))


@api.route("/users/make-volunteer/<user_id>", methods=["PATCH"])
@role_required("admin")
def make_volunteer(auth_ctx, user_id):
    return jsonify(services().users.set_role(user_id, "volunteer"))


@api.route("/users/make-admin/<user_id>", methods=["PATCH"])
@role_required("admin")
def make_admin(auth_ctx, user_id):
    return jsonify(services().users.set_role(user_id, "admin"))
