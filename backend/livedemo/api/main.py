from fastapi import APIRouter

from livedemo.api.routes import compiler, demos, utils

api_router = APIRouter()
api_router.include_router(utils.router)
api_router.include_router(demos.router)
api_router.include_router(compiler.router)
