"""Record ids: ULIDs, strictly increasing within the process."""

import threading
from typing import Optional

from ulid import ULID

_last_ulid: Optional[ULID] = None
_lock = threading.Lock()


def generate_ulid() -> str:
    """
    Generate a new ULID string.

    Ids are strictly increasing within the process: when two ids land in the
    same millisecond the second one is the first plus one, so sorting by id
    matches creation order.
    """
    global _last_ulid
    with _lock:
        candidate = ULID()
        if _last_ulid is not None and int(candidate) <= int(_last_ulid):
            candidate = ULID.from_int(int(_last_ulid) + 1)
        _last_ulid = candidate
        return str(candidate)


def parse_ulid(ulid_str: str) -> Optional[ULID]:
    """ULID for ``ulid_str``, or None when it is not one."""
    try:
        return ULID.from_str(ulid_str)
    except (ValueError, TypeError):
        return None


def is_valid_ulid(ulid_str: str) -> bool:
    return parse_ulid(ulid_str) is not None
