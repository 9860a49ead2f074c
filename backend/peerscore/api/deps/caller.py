from fastapi import Depends, Header, HTTPException, Request, status

from peerscore.services.ledger_service import PeerLedger


def get_ledger(request: Request) -> PeerLedger:
    return request.app.state.ledger


def require_caller(x_caller_address: str | None = Header(None)) -> str:
    if x_caller_address is None or not x_caller_address.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing caller address",
        )
    return x_caller_address.strip()


def require_authority(
    caller: str = Depends(require_caller),
    ledger: PeerLedger = Depends(get_ledger),
) -> str:
    if not ledger.gate.is_authority(caller):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Caller is not the authority",
        )
    return caller


AuthorityAuth = Depends(require_authority)
