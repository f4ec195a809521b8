import logging

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi

from resume_parser.api.routes.parse import router as parse_router
from resume_parser.core.config import settings

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

API_VERSION = "0.1.0"

TAGS_METADATA = [
    {"name": "parse", "description": "Turn résumé files or text into a structured ResumeRecord"},
    {"name": "health", "description": "Liveness probes"},
]

app = FastAPI(
    title="Resume Parser (Structured Extraction Service)",
    description="Heuristic two-tier résumé parsing service that turns DOCX/PDF/TXT résumés into structured records",
    version=API_VERSION,
)

app.include_router(parse_router)


@app.get("/", tags=["health"])
def root():
    return {"service": "resume-parser", "status": "running"}


@app.get("/health", tags=["health"])
def health():
    return {"status": "ok"}


def custom_openapi():
    """OpenAPI schema with tag descriptions, built once."""
    if not app.openapi_schema:
        app.openapi_schema = get_openapi(
            title="Resume Parser API",
            version=API_VERSION,
            description="Résumé text to structured record (basics, work, education, skills, projects, certifications)",
            routes=app.routes,
            tags=TAGS_METADATA,
        )
    return app.openapi_schema


app.openapi = custom_openapi
