from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from boardgame_list.core.config import settings
from boardgame_list.core.http_hardening import install_http_hardening
from boardgame_list.core.logging import configure_logging
from boardgame_list.api.router import router as api_router
from boardgame_list.db.init_db import init_db
from boardgame_list.db.session import engine
from boardgame_list.services.authorization import build_default_policies
from boardgame_list.services.list_cache import build_list_cache

configure_logging(settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db(engine)
    yield


app = FastAPI(title=settings.APP_NAME, version="0.1.0", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
install_http_hardening(app)

# Process-wide components, built once and handed to routes through dependencies.
app.state.list_cache = build_list_cache(settings)
app.state.policies = build_default_policies()

app.include_router(api_router)

@app.get("/", include_in_schema=False)
def landing():
    return JSONResponse({"service": settings.APP_NAME, "status": "ok"})

@app.get("/health")
def health():
    return {"status": "ok"}

@app.get("/error/test", include_in_schema=False)
def error_test():
    raise RuntimeError("test")
