from io import BytesIO
from typing import List

from docx import Document


def _table_lines(doc) -> List[str]:
    # Two-column resume templates keep whole sections inside table cells
    lines: List[str] = []
    for table in doc.tables:
        for row in table.rows:
            for cell in row.cells:
                for p in cell.paragraphs:
                    t = (p.text or "").strip()
                    if t and (not lines or lines[-1] != t):
                        lines.append(t)
    return lines


def extract_docx_text(docx_bytes: bytes) -> str:
    """
    Decode a DOCX into newline-separated text: body paragraphs first, then
    table cell paragraphs. Empty paragraphs are dropped.
    """
    doc = Document(BytesIO(docx_bytes))
    lines = [(p.text or "").strip() for p in doc.paragraphs]
    lines = [t for t in lines if t]
    lines.extend(_table_lines(doc))
    return "\n".join(lines)
