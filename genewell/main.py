import logging

from fastapi import FastAPI

from genewell.config import settings
from genewell.blueprint.errors import RenderError, ValidationError
from genewell.blueprint.router import render_error_handler, router as blueprint_router, validation_error_handler

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Genewell Blueprint", version="0.1.0")
app.include_router(blueprint_router)
app.add_exception_handler(ValidationError, validation_error_handler)
app.add_exception_handler(RenderError, render_error_handler)


@app.get("/")
async def root() -> dict:
    return {
        "status": "ok",
        "docs": "/docs",
        "health": "/health",
        "blueprint": {
            "plans": "/blueprint/plans",
            "quote": "/blueprint/quote",
            "analyze": "/blueprint/analyze",
            "outline": "/blueprint/outline",
            "report": "/blueprint/report",
        },
    }


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
