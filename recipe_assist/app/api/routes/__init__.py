from fastapi import APIRouter

from recipe_assist.app.api.routes import ai, evaluation_reports, recipes

api_router = APIRouter()
api_router.include_router(recipes.router)
api_router.include_router(ai.router)
api_router.include_router(evaluation_reports.router)
