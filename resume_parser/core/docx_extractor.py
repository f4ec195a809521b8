from io import BytesIO

from docx import Document


def extract_docx_text(docx_bytes: bytes) -> str:
    """
    Paragraph text of a DOCX, one paragraph per line.

    Table cells are appended after the body paragraphs, one row per line with
    cells joined by " | ". Empty paragraphs are kept as blank lines so section
    spacing survives.
    """
    doc = Document(BytesIO(docx_bytes))
    lines = [(p.text or "").strip() for p in doc.paragraphs]

    for table in doc.tables:
        for row in table.rows:
            cells = [(c.text or "").strip() for c in row.cells]
            cells = [c for c in cells if c]
            if cells:
                lines.append(" | ".join(cells))

    return "\n".join(lines).strip()
