"""FastAPI application entry point."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from propcalc.api.routes import portfolio, projection
from propcalc.config import settings

logging.getLogger("propcalc").setLevel(settings.log_level)

app = FastAPI(
    title="Property Calculator",
    description="Leveraged rental property projection",
    version="0.1.0",
    debug=settings.debug,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(projection.router)
app.include_router(portfolio.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
