from __future__ import annotations

import logging

from peerscore.errors import NotOwner, OutOfRange

logger = logging.getLogger(__name__)


class AuthorityGate:
    """Single-address access control for administrative operations."""

    def __init__(self, authority: str) -> None:
        if not authority:
            raise OutOfRange("Authority address must not be empty")
        self._authority = authority

    @property
    def authority(self) -> str:
        return self._authority

    def is_authority(self, caller: str | None) -> bool:
        return caller is not None and caller == self._authority

    def require_authority(self, caller: str | None) -> None:
        if not self.is_authority(caller):
            raise NotOwner(f"{caller or 'anonymous caller'} is not the authority")

    def transfer(self, caller: str, new_authority: str) -> str:
        self.require_authority(caller)
        new_authority = new_authority.strip()
        if not new_authority:
            raise OutOfRange("New authority address must not be empty")
        previous = self._authority
        self._authority = new_authority
        logger.info("authority transferred from %s to %s", previous, new_authority)
        return previous
