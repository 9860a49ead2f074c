from __future__ import annotations


class LedgerError(Exception):
    pass


class OutOfRange(LedgerError):
    pass


class NotMinted(LedgerError):
    pass


class NotOwner(LedgerError):
    pass


class AlreadyExists(LedgerError):
    pass


class DivisionByZero(LedgerError):
    pass


class NarrowingOverflow(LedgerError):
    pass
