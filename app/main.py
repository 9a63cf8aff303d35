import time
from fastapi import FastAPI, Request
from dotenv import load_dotenv

# Load environment variables from .env file before anything else
load_dotenv()

from app.core.config import settings
from app.core.logging import setup_logging, request_id_ctx
from app.core.errors import install_error_handlers
from app.api.router import api_router
from app.core.db import init_models, close_engine

import logging

setup_logging()
app = FastAPI(title=settings.APP_NAME)
install_error_handlers(app)

logger = logging.getLogger(__name__)

@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()

    response = await call_next(request)

    process_time = (time.time() - start_time) * 1000
    formatted_process_time = f"{process_time:.2f}ms"

    logger.info(
        f"Request: {request.method} {request.url.path} - Response: {response.status_code} - Time: {formatted_process_time}"
    )

    return response

# registered last so it runs outermost and the id is set for the log line above
@app.middleware("http")
async def add_request_id(request: Request, call_next):
    rid = request.headers.get("x-request-id", "-")
    token = request_id_ctx.set(rid)
    try:
        return await call_next(request)
    finally:
        request_id_ctx.reset(token)


@app.on_event("startup")
async def on_startup():
    await init_models()
    logger.info(f"{settings.APP_NAME} started (env={settings.ENV})")

@app.on_event("shutdown")
async def on_shutdown():
    await close_engine()


@app.get("/health", tags=["health"])
async def health():
    return {"status": "ok"}


app.include_router(api_router, prefix=settings.API_PREFIX)
