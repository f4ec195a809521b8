from io import BytesIO
from itertools import groupby
from typing import Any, List

import pdfplumber


def _page_lines(page: Any, *, x_tolerance: float = 3, y_tolerance: float = 2, line_y_tolerance: float = 3) -> List[str]:
    """
    Rebuild the visual lines of a PDF page from its word objects.

    Words are bucketed by their 'top' coordinate, each bucket is ordered left
    to right by 'x0', and words are joined with single spaces. Working from
    words rather than layout text avoids glued and over-spaced words.

    Args:
        page: pdfplumber page object
        x_tolerance: horizontal gap allowed between characters of one word
        y_tolerance: vertical drift allowed between characters of one word
        line_y_tolerance: bucket height for grouping words into one line

    Returns:
        One string per visual line, top to bottom
    """
    words = page.extract_words(
        x_tolerance=x_tolerance,
        y_tolerance=y_tolerance,
        keep_blank_chars=False,
    )

    def bucket(w):
        return round(w["top"] / line_y_tolerance)

    ordered = sorted(words, key=lambda w: (bucket(w), w["x0"]))
    return [" ".join(w["text"] for w in group) for _, group in groupby(ordered, key=bucket)]


def extract_pdf_text(pdf_bytes: bytes) -> str:
    """
    Extract the text layer of a PDF as a single string.

    Pages are separated by a blank line. Returns "" when the PDF has no text
    layer (scanned documents; OCR is not supported).
    """
    pages: List[str] = []
    with pdfplumber.open(BytesIO(pdf_bytes)) as document:
        for page in document.pages:
            text = "\n".join(_page_lines(page)).strip()
            if text:
                pages.append(text)
    return "\n\n".join(pages)
