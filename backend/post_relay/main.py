import logging
from datetime import datetime, timezone

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from .api import posts
from .settings import settings


app = FastAPI(
    title="Post Relay API",
    version="0.1.0",
    description="Relays posts from an upstream REST API",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(posts.router, prefix="/api", tags=["posts"])


@app.get("/", response_class=PlainTextResponse, tags=["root"])
def hello() -> str:
    return "Hello World!"


@app.get("/health", tags=["health"])
def healthcheck() -> dict:
    """Liveness probe for monitors and load balancers."""
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


def run() -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
