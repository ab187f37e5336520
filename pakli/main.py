# File: pakli/main.py

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from slowapi import _rate_limit_exceeded_handler

from pakli.core.config import cors_origins_list, settings
from pakli.core.ratelimit import limiter
from pakli.routers import auth, outages, subscriptions, users

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s | %(levelname)-8s | %(name)s - %(message)s",
)

app = FastAPI(title="Pakli Outages API")
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins_list(),
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/health")
def health():
    return {"ok": True}

app.include_router(outages.router)
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(subscriptions.router)
