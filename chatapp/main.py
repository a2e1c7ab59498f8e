import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from chatapp.core.config import Settings, get_settings
from chatapp.core.errors import STORE_ERRORS, NotFoundError, StoreError
from chatapp.core.logging_setup import setup_logging
from chatapp.database.connection import (
    close_mongo_connection,
    connect_to_mongo,
    get_database,
    mongo_db_dependency,
)
from chatapp.repositories.chat_repository import ChatRepository
from chatapp.repositories.message_repository import MessageRepository
from chatapp.routers.chats import router as chats_router
from chatapp.routers.messages import router as messages_router
from chatapp.routers.users import router as users_router


logger = logging.getLogger(__name__)

GENERIC_STORE_ERROR = "The data store could not complete the request."


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):

        await connect_to_mongo(settings)
        db = get_database()
        await ChatRepository(db).ensure_indexes()
        await MessageRepository(db).ensure_indexes()
        try:
            yield
        finally:
            await close_mongo_connection()

    app = FastAPI(title="Chat API with MongoDB", lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.cors_origin],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.operation, exc_info=exc.cause)
        message = exc.message if settings.expose_error_details else GENERIC_STORE_ERROR
        return JSONResponse(status_code=exc.status_code, content={"error": exc.operation, "message": message})

    app.include_router(users_router)
    app.include_router(chats_router)
    app.include_router(messages_router)

    @app.get("/")
    async def root(db = Depends(mongo_db_dependency)):

        try:
            collections = await db.list_collection_names()
        except STORE_ERRORS as exc:
            raise StoreError("Error reaching database", exc) from exc
        return {"message": "Connected to MongoDB!", "collections": collections}

    return app


app = create_app()


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run("chatapp.main:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
