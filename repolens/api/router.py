from fastapi import APIRouter

from repolens.api.v1 import diffs, repositories, stats, timeline

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(repositories.router)
api_router.include_router(timeline.router)
api_router.include_router(stats.router)
api_router.include_router(diffs.router)
