"""
Runtime borrow tracking for shared pixel buffers.

An image that lends its buffer to slices carries a ``BorrowFlag``. Any
number of shared borrows, or exactly one exclusive borrow, may be alive at
a time. The owner may not be written while any borrow is alive, and may not
be read while an exclusive borrow is alive.
"""

import logging

from IP_Libs.ImageCoreLib.errors import BorrowError

logger = logging.getLogger(__name__)


class BorrowFlag:
    """Counts live shared borrows and tracks a single exclusive borrow."""

    def __init__(self, owner_name: str = "image"):
        self._owner_name = owner_name
        self._shared = 0
        self._exclusive = False

    @property
    def shared_count(self) -> int:
        return self._shared

    @property
    def is_exclusive(self) -> bool:
        return self._exclusive

    @property
    def is_borrowed(self) -> bool:
        return self._exclusive or self._shared > 0

    def acquire_shared(self) -> None:
        if self._exclusive:
            raise BorrowError(
                f"Cannot borrow {self._owner_name}: it is mutably borrowed"
            )
        self._shared += 1

    def acquire_exclusive(self) -> None:
        if self._exclusive:
            raise BorrowError(
                f"Cannot mutably borrow {self._owner_name}: it is already mutably borrowed"
            )
        if self._shared:
            raise BorrowError(
                f"Cannot mutably borrow {self._owner_name}: "
                f"{self._shared} shared borrow(s) still alive"
            )
        self._exclusive = True

    def release(self, exclusive: bool) -> None:
        if exclusive:
            self._exclusive = False
        elif self._shared > 0:
            self._shared -= 1
        logger.debug(
            f"Released {'exclusive' if exclusive else 'shared'} borrow of {self._owner_name}"
        )

    def check_readable(self) -> None:
        if self._exclusive:
            raise BorrowError(
                f"Cannot read {self._owner_name} while it is mutably borrowed"
            )

    def check_writable(self) -> None:
        if self._exclusive:
            raise BorrowError(
                f"Cannot modify {self._owner_name} while it is mutably borrowed"
            )
        if self._shared:
            raise BorrowError(
                f"Cannot modify {self._owner_name} while "
                f"{self._shared} slice(s) borrow it"
            )
