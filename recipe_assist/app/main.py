import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status

from recipe_assist.app.api.routes import api_router
from recipe_assist.app.core.config import get_settings
from recipe_assist.app.core.container import ServiceContainer
from recipe_assist.app.db.session import create_tables

logger = logging.getLogger(__name__)


async def validation_exception_handler(request, exc: RequestValidationError):
    details = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", []) if part is not None)
        msg = err.get("msg", "Invalid value")
        details.append({"field": loc or None, "message": msg})
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error_code": "validation_error",
            "message": "Invalid request payload.",
            "details": details,
        },
    )


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = FastAPI(title="Recipe Assist", version="0.1.0")
    app.state.services = ServiceContainer(settings)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.include_router(api_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.on_event("startup")
    async def startup_event() -> None:
        create_tables()
        logger.info("Database tables ready")

    @app.on_event("shutdown")
    async def shutdown_event() -> None:
        await app.state.services.aclose()

    return app


app = create_app()
