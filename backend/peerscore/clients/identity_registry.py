from __future__ import annotations

from collections.abc import Callable
import logging
from typing import Protocol

from peerscore.errors import AlreadyExists, NotMinted, NotOwner

logger = logging.getLogger(__name__)

ReceiverCheck = Callable[[str], bool]


class IdentityRegistry(Protocol):
    def owner_of(self, identity_id: int) -> str: ...

    def balance_of(self, holder: str) -> int: ...

    def token_of(self, holder: str) -> int: ...

    def mint(self, to: str) -> int: ...

    def burn(self, caller: str, identity_id: int) -> None: ...

    def exists(self, identity_id: int) -> bool: ...


class InMemoryIdentityRegistry:
    """Non-transferable identity tokens, at most one per holder.

    Ids are issued sequentially from 0 and never reused after a burn.
    ``receiver_check`` is consulted before a mint completes; a holder that
    refuses the token leaves the registry untouched.
    """

    def __init__(self, *, receiver_check: ReceiverCheck | None = None) -> None:
        self._owners: dict[int, str] = {}
        self._tokens: dict[str, int] = {}
        self._next_id = 0
        self._receiver_check = receiver_check

    def exists(self, identity_id: int) -> bool:
        return identity_id in self._owners

    def owner_of(self, identity_id: int) -> str:
        owner = self._owners.get(identity_id)
        if owner is None:
            raise NotMinted(f"Identity {identity_id} has not been minted")
        return owner

    def balance_of(self, holder: str) -> int:
        return 1 if holder in self._tokens else 0

    def token_of(self, holder: str) -> int:
        identity_id = self._tokens.get(holder)
        if identity_id is None:
            raise NotMinted(f"{holder} holds no identity")
        return identity_id

    def mint(self, to: str) -> int:
        if self.balance_of(to):
            raise AlreadyExists(f"{to} already holds identity {self._tokens[to]}")
        if self._receiver_check is not None and not self._receiver_check(to):
            raise NotOwner(f"{to} refused the identity token")
        identity_id = self._next_id
        self._next_id += 1
        self._owners[identity_id] = to
        self._tokens[to] = identity_id
        logger.debug("minted identity %s to %s", identity_id, to)
        return identity_id

    def burn(self, caller: str, identity_id: int) -> None:
        owner = self.owner_of(identity_id)
        if owner != caller:
            raise NotOwner(f"{caller} does not hold identity {identity_id}")
        del self._owners[identity_id]
        del self._tokens[owner]

    def transfer(self, caller: str, identity_id: int, to: str) -> None:
        self.owner_of(identity_id)
        raise NotOwner(f"Identity {identity_id} is non-transferable")
