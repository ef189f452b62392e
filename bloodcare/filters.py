"""Query filter construction from optional search parameters.

A parameter that is missing (or set to its "no preference" value) adds no
clause at all. It never becomes an equality against null.
"""
from dataclasses import dataclass, field
from typing import Any, Dict

ALL_BLOOD_GROUPS = "all"


@dataclass
class SearchFilter:
    equals: Dict[str, Any] = field(default_factory=dict)
    not_equals: Dict[str, Any] = field(default_factory=dict)
    newest_first: bool = False

    def apply(self, query, model):
        for name, value in self.equals.items():
            query = query.filter(getattr(model, name) == value)
        for name, value in self.not_equals.items():
            query = query.filter(getattr(model, name) != value)
        if self.newest_first:
            query = query.order_by(model.created_at.desc())
        return query


def donor_filter(blood=None, district=None, upazila=None, current_user=None):
    search = SearchFilter(equals={"role": "donor"})
    if blood and blood != ALL_BLOOD_GROUPS:
        search.equals["blood_group"] = blood
    if district:
        search.equals["district"] = district
    if upazila:
        search.equals["upazila"] = upazila
    if current_user:
        search.not_equals["email"] = current_user
    return search


def donation_request_filter(email_field, email=None, status=None, always_sort=False):
    """Filter donation requests by an owner email column and/or status.

    Results are sorted newest first only when both email and status are given,
    unless ``always_sort`` asks for it whenever a clause is present.
    """
    search = SearchFilter()
    if email:
        search.equals[email_field] = email
    if status:
        search.equals["donation_status"] = status
    if email and status:
        search.newest_first = True
    elif always_sort and search.equals:
        search.newest_first = True
    return search


def pending_filter():
    return SearchFilter(equals={"donation_status": "pending"})
