from __future__ import annotations

import html
import json
import logging
import textwrap
from dataclasses import dataclass
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Literal, Optional, Sequence

from sentiment_dashboard.sentiment_types import AnalysisResult, to_percent

logger = logging.getLogger(__name__)

ExportFormat = Literal["csv", "json", "pdf"]
EXPORT_FORMATS: tuple[ExportFormat, ...] = ("csv", "json", "pdf")

CSV_HEADERS = (
    "Timestamp",
    "Text",
    "Primary Sentiment",
    "Confidence",
    "Positive %",
    "Negative %",
    "Neutral %",
    "Keywords",
)

# ---- PDF page plan (millimetres on A4, font sizes in pt) ----
PAGE_BREAK_Y = 250.0
PAGE_TOP_Y = 30.0
FIRST_RESULT_Y = 75.0
MARGIN_X = 20.0
SCORE_INDENT_X = 30.0
MAX_TEXT_LINES = 3
DEFAULT_WRAP_CHARS = 95  # ~170mm of 10pt Helvetica
_PT_TO_MM = 25.4 / 72


def select_export(current: Optional[AnalysisResult], results: Sequence[AnalysisResult]) -> list[AnalysisResult]:
    """Current result when there is one, otherwise the whole history (may be empty)."""
    if current is not None:
        return [current]
    return list(results)


def export_filename(fmt: ExportFormat, day: date) -> str:
    return f"sentiment-analysis-{day.isoformat()}.{fmt}"


def _require_results(results: Sequence[AnalysisResult]) -> None:
    if not results:
        raise ValueError("Nothing to export: no analysis results")


def _as_utc(ts: datetime) -> datetime:
    """Naive datetimes are taken to be UTC already."""
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def _iso_utc(ts: datetime) -> str:
    """2026-01-28T13:28:48.123Z"""
    return _as_utc(ts).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _quote(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def to_csv(results: Sequence[AnalysisResult]) -> bytes:
    """
    One header row + one row per result.

    Text and keywords are always quoted; other fields never contain separators.

    Raises:
        ValueError: if results is empty
    """
    _require_results(results)
    rows = [",".join(CSV_HEADERS)]
    for r in results:
        rows.append(
            ",".join(
                [
                    _iso_utc(r.timestamp),
                    _quote(r.text),
                    r.primary.label,
                    f"{to_percent(r.confidence)}%",
                    f"{to_percent(r.score_for('POSITIVE'))}%",
                    f"{to_percent(r.score_for('NEGATIVE'))}%",
                    f"{to_percent(r.score_for('NEUTRAL'))}%",
                    _quote(", ".join(r.keywords)),
                ]
            )
        )
    return "\n".join(rows).encode("utf-8")


def _to_json_item(r: AnalysisResult) -> dict[str, Any]:
    return {
        "timestamp": _iso_utc(r.timestamp),
        "text": r.text,
        "sentiment": [{"label": s.label, "score": s.score} for s in r.sentiment],
        "confidence": r.confidence,
        "keywords": list(r.keywords),
        "primarySentiment": r.primary.label,
        "scores": {
            "positive": to_percent(r.score_for("POSITIVE")),
            "negative": to_percent(r.score_for("NEGATIVE")),
            "neutral": to_percent(r.score_for("NEUTRAL")),
        },
    }


def to_json(results: Sequence[AnalysisResult], export_date: datetime) -> bytes:
    """
    Raises:
        ValueError: if results is empty
    """
    _require_results(results)
    payload = {
        "exportDate": _iso_utc(export_date),
        "totalAnalyses": len(results),
        "analyses": [_to_json_item(r) for r in results],
    }
    return json.dumps(payload, ensure_ascii=False, indent=2).encode("utf-8")


@dataclass(frozen=True)
class PdfLine:
    x: float  # mm from left edge
    y: float  # baseline, mm from top edge
    font_size: float  # pt
    text: str


@dataclass(frozen=True)
class PdfPage:
    lines: tuple[PdfLine, ...]


def wrap_text(text: str, width: int) -> list[str]:
    """Wrap like a text box: explicit newlines are kept, long words are broken."""
    lines: list[str] = []
    for paragraph in text.split("\n"):
        lines.extend(textwrap.wrap(paragraph, width=width) or [""])
    return lines


def layout_pdf(
        results: Sequence[AnalysisResult],
        generated_on: date,
        wrap_chars: int = DEFAULT_WRAP_CHARS,
) -> list[PdfPage]:
    """
    Paginated text report.

    A new page starts (cursor back to PAGE_TOP_Y) before a result block whenever
    the cursor has passed PAGE_BREAK_Y; blocks themselves are never split.

    Raises:
        ValueError: if results is empty
    """
    _require_results(results)
    pages: list[list[PdfLine]] = [[]]

    def put(x: float, y: float, size: float, text: str) -> None:
        pages[-1].append(PdfLine(x=x, y=y, font_size=size, text=text))

    put(MARGIN_X, 30, 20, "Sentiment Analysis Report")
    put(MARGIN_X, 45, 12, f"Generated on: {generated_on.isoformat()}")
    put(MARGIN_X, 55, 12, f"Total Analyses: {len(results)}")

    y = FIRST_RESULT_Y
    for index, r in enumerate(results, start=1):
        if y > PAGE_BREAK_Y:
            pages.append([])
            y = PAGE_TOP_Y

        put(MARGIN_X, y, 14, f"Analysis {index}")
        y += 10

        put(MARGIN_X, y, 10, f"Date: {r.timestamp.strftime('%Y-%m-%d %H:%M:%S')}")
        y += 8

        text_lines = wrap_text(f"Text: {r.text}", wrap_chars)
        shown = text_lines[:MAX_TEXT_LINES]
        if len(text_lines) > MAX_TEXT_LINES:
            shown[-1] += "..."
        for i, line in enumerate(shown):
            put(MARGIN_X, y + i * 5, 10, line)
        y += len(shown) * 5 + 5

        put(
            MARGIN_X,
            y,
            10,
            f"Primary Sentiment: {r.primary.label} ({to_percent(r.confidence)}% confidence)",
        )
        y += 8

        for s in r.sentiment:
            put(SCORE_INDENT_X, y, 10, f"{s.label}: {to_percent(s.score)}%")
            y += 6

        if r.keywords:
            put(MARGIN_X, y, 10, f"Keywords: {', '.join(r.keywords)}")
            y += 8

        y += 10

    return [PdfPage(lines=tuple(p)) for p in pages]


_PDF_CSS = """
@page { size: A4; margin: 0; }
body { margin: 0; font-family: Helvetica, Arial, sans-serif; }
.page { position: relative; width: 210mm; height: 297mm; overflow: hidden; page-break-after: always; }
.page:last-child { page-break-after: auto; }
.line { position: absolute; white-space: pre; line-height: 1; }
"""


def pdf_html(pages: Sequence[PdfPage], title: str = "Sentiment Analysis Report") -> str:
    """HTML with one fixed-size sheet per page and absolutely placed lines."""
    sheets = []
    for page in pages:
        lines = []
        for line in page.lines:
            # baseline -> top of the line box (cap height ~ 0.8 em)
            top = line.y - line.font_size * _PT_TO_MM * 0.8
            lines.append(
                f'<div class="line" style="left:{line.x:.2f}mm;top:{top:.2f}mm;'
                f'font-size:{line.font_size:g}pt">{html.escape(line.text)}</div>'
            )
        sheets.append('<div class="page">' + "".join(lines) + "</div>")
    return (
        "<!DOCTYPE html><html><head><meta charset=\"utf-8\">"
        f"<title>{html.escape(title)}</title><style>{_PDF_CSS}</style></head>"
        f"<body>{''.join(sheets)}</body></html>"
    )


def to_pdf(
        results: Sequence[AnalysisResult],
        generated_on: date,
        wrap_chars: int = DEFAULT_WRAP_CHARS,
) -> bytes:
    """
    Raises:
        ValueError: if results is empty
    """
    pages = layout_pdf(results, generated_on, wrap_chars=wrap_chars)

    # weasyprint pulls in native libraries; only load it when a PDF is requested.
    import weasyprint

    pdf_bytes = weasyprint.HTML(string=pdf_html(pages)).write_pdf()
    logger.info("Rendered PDF report: results=%s pages=%s bytes=%s", len(results), len(pages), len(pdf_bytes))
    return pdf_bytes


def render_export(
        results: Sequence[AnalysisResult],
        fmt: ExportFormat,
        now: datetime,
        wrap_chars: int = DEFAULT_WRAP_CHARS,
) -> bytes:
    """
    Raises:
        ValueError: unknown format or empty results
    """
    # one export, one date: filename, exportDate and "Generated on" all use UTC
    now = _as_utc(now)
    if fmt == "csv":
        return to_csv(results)
    if fmt == "json":
        return to_json(results, export_date=now)
    if fmt == "pdf":
        return to_pdf(results, generated_on=now.date(), wrap_chars=wrap_chars)
    raise ValueError(f"Unsupported export format: {fmt}")


def write_export(
        results: Sequence[AnalysisResult],
        fmt: ExportFormat,
        directory: str | Path,
        now: Optional[datetime] = None,
        wrap_chars: int = DEFAULT_WRAP_CHARS,
) -> Path:
    """
    Write `sentiment-analysis-<date>.<fmt>` into directory (created if missing).

    Raises:
        ValueError: unknown format or empty results
    """
    now = _as_utc(now or datetime.now(timezone.utc))
    data = render_export(results, fmt, now, wrap_chars=wrap_chars)
    out_dir = Path(directory)
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / export_filename(fmt, now.date())
    path.write_bytes(data)
    logger.info("Exported results: format=%s count=%s path=%s", fmt, len(results), path)
    return path
