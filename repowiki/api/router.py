from fastapi import APIRouter

from repowiki.api.v1 import documentation, repositories, wiki

api_router = APIRouter(prefix="/api")

api_router.include_router(documentation.router)
api_router.include_router(repositories.router)
api_router.include_router(wiki.router)
