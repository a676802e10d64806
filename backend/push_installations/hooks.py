"""Pre-persist transformations applied by the storage layer."""
from collections.abc import MutableMapping
from datetime import datetime
from typing import Optional, TypeVar

R = TypeVar("R")


def stamp_modified(record: R, now: Optional[datetime] = None) -> R:
    """Set ``modified`` on a record that is about to be written.

    ``record`` is either a full ``Installation`` instance or a partial patch
    mapping. The same object is returned with ``modified`` set, so callers can
    use it inline before handing the write to the database.
    """
    now = now or datetime.utcnow()
    if isinstance(record, MutableMapping):
        record["modified"] = now
    else:
        record.modified = now
    return record
