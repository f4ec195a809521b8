import logging
from functools import lru_cache

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from resume_parser.core.config import settings
from resume_parser.core.docx_extractor import extract_docx_text
from resume_parser.core.patterns import primary_library, robust_library
from resume_parser.core.pdf_extractor import extract_pdf_text
from resume_parser.core.resume_parser import ResumeParser, collect_warnings
from resume_parser.core.schemas import ParseResponse, ResumeRecord, TextParseRequest, sample_record

logger = logging.getLogger(__name__)

router = APIRouter(tags=["parse"])

DOCX_CONTENT_TYPES = {"application/vnd.openxmlformats-officedocument.wordprocessingml.document"}
TEXT_CONTENT_TYPES = {"text/plain", "text/markdown"}


@lru_cache(maxsize=1)
def get_resume_parser() -> ResumeParser:
    """Parser built once from settings; its pattern libraries are never mutated afterwards."""
    primary = primary_library()
    robust = robust_library()
    for library in (primary, robust):
        library.location_search_chars = settings.LOCATION_SEARCH_CHARS
    robust.swap_title_company = settings.SWAP_TITLE_COMPANY
    return ResumeParser(primary=primary, robust=robust, enable_robust=settings.ENABLE_ROBUST_PARSER)


def _respond(text: str, parser: ResumeParser) -> ParseResponse:
    outcome = parser.parse_with_diagnostics(text)
    return ParseResponse(
        resume=outcome.record,
        tier=outcome.tier,
        sections_found=outcome.sections_found,
        warnings=collect_warnings(outcome.record),
    )


@router.post(
    "/parse",
    response_model=ParseResponse,
    summary="Parse Resume",
    description="Extract a structured résumé record from a DOCX, PDF, or TXT file.",
    responses={
        200: {
            "description": "Successfully parsed resume",
            "content": {
                "application/json": {
                    "example": {
                        "resume": {
                            "basics": {"name": "John Doe", "email": "john@example.com", "location": "Austin, TX"},
                            "work": [
                                {
                                    "position": "Senior Engineer",
                                    "company": "Tech Corp",
                                    "startDate": "Jan 2020",
                                    "endDate": "Present",
                                    "summary": "Built the billing platform.",
                                }
                            ],
                            "education": [],
                            "skills": [{"name": "Languages", "keywords": ["Python", "Go"]}],
                            "projects": [],
                            "certifications": [],
                        },
                        "tier": "primary",
                        "sections_found": ["experience", "skills"],
                        "warnings": ["No education entries detected"],
                    }
                }
            },
        },
        400: {"description": "Empty file uploaded"},
        413: {"description": "File larger than the configured upload limit"},
        415: {"description": "Unsupported file format"},
        422: {"description": "File has no extractable text or could not be read"},
    },
)
async def parse_resume(
    file: UploadFile = File(..., description="Resume file (DOCX, PDF, or TXT format)"),
    parser: ResumeParser = Depends(get_resume_parser),
):
    """
    Parse a resume file into a ResumeRecord.

    **Supported formats:**
    - DOCX (.docx)
    - PDF (.pdf) - Text-layer extraction only, OCR not supported
    - TXT / Markdown (.txt, .md)

    **Returns:**
    - **resume**: the structured record (basics, work, education, skills, projects, certifications)
    - **tier**: which extraction tier produced it ("primary" or "robust")
    - **sections_found**: section kinds detected in the document
    - **warnings**: missing-data notes
    """
    raw = await file.read()
    if not raw:
        logger.warning("Rejected upload: empty file")
        raise HTTPException(status_code=400, detail="Empty file uploaded.")

    if len(raw) > settings.MAX_UPLOAD_SIZE_MB * 1024 * 1024:
        logger.warning(f"Rejected upload: {len(raw)} bytes exceeds {settings.MAX_UPLOAD_SIZE_MB} MB")
        raise HTTPException(status_code=413, detail=f"File exceeds the {settings.MAX_UPLOAD_SIZE_MB} MB limit.")

    filename = (file.filename or "").lower()
    content_type = (file.content_type or "").lower()

    # DOCX
    if filename.endswith(".docx") or content_type in DOCX_CONTENT_TYPES:
        try:
            text = extract_docx_text(raw)
        except Exception as e:
            logger.warning(f"Rejected upload: unreadable DOCX ({type(e).__name__})")
            raise HTTPException(status_code=422, detail="Could not read DOCX file.") from e
        return _respond(text, parser)

    # PDF
    if filename.endswith(".pdf") or content_type == "application/pdf":
        try:
            text = extract_pdf_text(raw)
        except Exception as e:
            logger.warning(f"Rejected upload: unreadable PDF ({type(e).__name__})")
            raise HTTPException(status_code=422, detail="Could not read PDF file.") from e
        if not text.strip():
            logger.warning("Rejected upload: PDF has no text layer")
            raise HTTPException(
                status_code=422,
                detail="PDF appears to have no extractable text. OCR is not supported.",
            )
        return _respond(text, parser)

    # Text
    if content_type in TEXT_CONTENT_TYPES or filename.endswith((".txt", ".md")):
        return _respond(raw.decode("utf-8", errors="replace"), parser)

    logger.warning(f"Rejected upload: unsupported content type {file.content_type!r}")
    raise HTTPException(status_code=415, detail=f"Unsupported content type: {file.content_type}")


@router.post(
    "/parse/text",
    response_model=ParseResponse,
    summary="Parse Resume Text",
    description="Parse résumé text that was already extracted upstream.",
)
def parse_resume_text(request: TextParseRequest, parser: ResumeParser = Depends(get_resume_parser)):
    return _respond(request.text, parser)


@router.get(
    "/sample",
    response_model=ResumeRecord,
    summary="Sample Resume",
    description="Fixed sample record for previewing templates without data.",
)
def sample_resume():
    return sample_record()
