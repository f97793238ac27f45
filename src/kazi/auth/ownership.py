"""Resource ownership guard.

Learn: Jobs belong to the employer who posted them. Before any update or
delete the route looks the job up (404 if missing, for every caller) and
only then compares owner and requester. Doing it in that order means a
non-owner can't tell "forbidden" apart from "exists" for missing ids.
"""

from kazi.errors import ForbiddenError


def authorize(resource_owner_id, requester_id) -> bool:
    """Exact identifier match. No delegation, no hierarchy."""
    if resource_owner_id is None or requester_id is None:
        return False
    return str(resource_owner_id) == str(requester_id)


def ensure_owner(resource_owner_id, requester_id, resource: str = "resource") -> None:
    if not authorize(resource_owner_id, requester_id):
        raise ForbiddenError(f"You can only modify your own {resource}")
