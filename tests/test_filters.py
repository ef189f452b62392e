from bloodcare.filters import donation_request_filter, donor_filter, pending_filter


# ─── donor search ─────────────────────────────────────────────

def test_donor_filter_all_blood_and_blanks_add_no_clauses():
    search = donor_filter(blood="all", district="", upazila="")
    assert search.equals == {"role": "donor"}
    assert search.not_equals == {}
    assert search.newest_first is False


def test_donor_filter_missing_params_are_not_null_matches():
    search = donor_filter()
    assert search.equals == {"role": "donor"}
    assert None not in search.equals.values()


def test_donor_filter_includes_present_params():
    search = donor_filter(blood="O+", district="Dhaka", upazila="Savar", current_user="me@x.com")
    assert search.equals == {
        "role": "donor",
        "blood_group": "O+",
        "district": "Dhaka",
        "upazila": "Savar",
    }
    assert search.not_equals == {"email": "me@x.com"}


# ─── donation request search ──────────────────────────────────

def test_request_filter_without_params_is_unfiltered():
    search = donation_request_filter("requester_email")
    assert search.equals == {}
    assert search.newest_first is False


def test_request_filter_email_only_is_unsorted():
    search = donation_request_filter("requester_email", email="a@x.com")
    assert search.equals == {"requester_email": "a@x.com"}
    assert search.newest_first is False


def test_request_filter_status_only_is_unsorted():
    search = donation_request_filter("requester_email", status="done")
    assert search.equals == {"donation_status": "done"}
    assert search.newest_first is False


def test_request_filter_both_sorts_newest_first():
    search = donation_request_filter("donor_email", email="b@x.com", status="inprogress")
    assert search.equals == {"donor_email": "b@x.com", "donation_status": "inprogress"}
    assert search.newest_first is True


def test_request_filter_always_sort_applies_to_single_clause():
    search = donation_request_filter("donor_email", email="b@x.com", always_sort=True)
    assert search.newest_first is True


def test_pending_filter():
    assert pending_filter().equals == {"donation_status": "pending"}
