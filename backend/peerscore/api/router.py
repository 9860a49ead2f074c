from fastapi import APIRouter

from peerscore.api.routes.admin.router import router as admin_router
from peerscore.api.routes.authority import router as authority_router
from peerscore.api.routes.identities import router as identities_router
from peerscore.api.routes.skills import router as skills_router

api_router = APIRouter()
api_router.include_router(identities_router)
api_router.include_router(skills_router)
api_router.include_router(authority_router)
api_router.include_router(admin_router)


@api_router.get("/healthz")
def healthcheck() -> dict[str, str]:
    return {"status": "ok"}
