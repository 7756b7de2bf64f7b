import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlmodel import SQLModel

from .error import ClientError, ServerError

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = exc.base_error.to_dict()
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(
        status_code=exc.status_code, content={"success": False, "error": error_dict}
    )


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(f"Server error: {exc.base_error.code}: {exc.base_error.message}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "error": error_dict},
    )


async def handle_request_validation_error(request: Request, exc: RequestValidationError):
    error_dict = {
        "code": "VALIDATION_ERROR",
        "message": "Request validation failed",
        "details": {
            "errors": [{"loc": list(e["loc"]), "msg": e["msg"]} for e in exc.errors()]
        },
    }
    logger.warning(f"Request validation error on {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
        content={"success": False, "error": error_dict},
    )


def create_app(ApplicationConfig) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if ApplicationConfig.CREATE_TABLES_ON_STARTUP:
            from engagement.depends import engine

            async with engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)
            logger.info("Database tables ensured")
        yield

    app = FastAPI(title="Engagement API", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from engagement.api.routes import (
        activity,
        admin,
        challenges,
        health_check,
        invitation,
        points,
        rewards,
        submissions,
        user,
        webhooks,
        workspaces,
    )

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(user.router, tags=["User"])
    app.include_router(admin.router, tags=["Admin"])
    app.include_router(workspaces.router, tags=["Workspace"])
    app.include_router(invitation.router, tags=["Invitations"])
    app.include_router(challenges.router, tags=["Challenges"])
    app.include_router(submissions.router, tags=["Submissions"])
    app.include_router(points.router, tags=["Points"])
    app.include_router(rewards.router, tags=["Rewards"])
    app.include_router(webhooks.router, tags=["Webhooks"])
    app.include_router(activity.router, tags=["Activity"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)

    return app
