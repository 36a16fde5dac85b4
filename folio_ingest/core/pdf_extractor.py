from io import BytesIO
from typing import Any, List, Tuple
import re

import pdfplumber


def _words_to_text(
    page: Any,
    x_tolerance: float = 2,
    y_tolerance: float = 2,
    line_y_tolerance: float = 3,
) -> str:
    """
    Build page text from pdfplumber word objects instead of layout text.

    Words are grouped into lines by their rounded 'top' coordinate and joined
    with single spaces, which avoids the glued-word problems of extract_text().
    """
    words = page.extract_words(
        x_tolerance=x_tolerance,
        y_tolerance=y_tolerance,
        keep_blank_chars=False,
        use_text_flow=True,
    )
    if not words:
        return ""

    words.sort(key=lambda w: (round(w["top"] / line_y_tolerance), w["x0"]))
    lines: List[str] = []
    current_key = None
    current_words: List[str] = []

    for w in words:
        key = round(w["top"] / line_y_tolerance)
        if current_key is None or key == current_key:
            current_words.append(w["text"])
            current_key = key
        else:
            lines.append(" ".join(current_words))
            current_words = [w["text"]]
            current_key = key

    if current_words:
        lines.append(" ".join(current_words))

    return "\n".join(lines)


def _score_text(s: str) -> float:
    """
    Score extracted text quality (lower is better).

    Penalizes very long alphabetic tokens (glued words) and a surplus of
    single-letter tokens (character fragmentation).
    """
    tokens = re.findall(r"[A-Za-z]+", s)
    if not tokens:
        return 1e9
    long_glued = sum(1 for t in tokens if len(t) >= 18)
    excessive_singles = max(0, sum(1 for t in tokens if len(t) == 1) - 10)
    return long_glued * 10 + excessive_singles * 3


def _extract_best(page: Any, x_tolerance_range: Tuple[float, ...] = (1.5, 2, 2.5, 3)) -> str:
    """Try several x_tolerance values and keep the best-scoring page text."""
    candidates = []
    for xt in x_tolerance_range:
        txt = _words_to_text(page, x_tolerance=xt)
        candidates.append((_score_text(txt), xt, txt))
    candidates.sort(key=lambda x: (x[0], x[1]))
    return candidates[0][2]


def extract_pdf_lines(pdf_bytes: bytes) -> List[str]:
    """
    Extract non-empty text lines from a PDF text layer, pages in order.

    Scanned PDFs without a text layer produce no lines; OCR is not attempted.
    """
    out: List[str] = []
    with pdfplumber.open(BytesIO(pdf_bytes)) as pdf:
        for page in pdf.pages:
            text = _extract_best(page)
            out.extend(ln.strip() for ln in text.splitlines() if ln.strip())
    return out


def extract_pdf_text(pdf_bytes: bytes) -> str:
    return "\n".join(extract_pdf_lines(pdf_bytes))
