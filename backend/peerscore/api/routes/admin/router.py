from fastapi import APIRouter

from peerscore.api.deps.caller import AuthorityAuth
from peerscore.api.routes.admin.authority import router as authority_router
from peerscore.api.routes.admin.catalog import router as catalog_router
from peerscore.api.routes.admin.evaluations import router as evaluations_router
from peerscore.api.routes.admin.scores import router as scores_router

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[AuthorityAuth])

router.include_router(evaluations_router)
router.include_router(scores_router)
router.include_router(catalog_router)
router.include_router(authority_router)
