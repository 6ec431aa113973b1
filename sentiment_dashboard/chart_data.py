from __future__ import annotations

from typing import Any, Sequence

from sentiment_dashboard.sentiment_types import AnalysisResult, to_percent


def distribution_slices(result: AnalysisResult) -> list[dict[str, Any]]:
    """Pie slices for one result, in ranked order."""
    return [{"name": s.label, "value": to_percent(s.score)} for s in result.sentiment]


def history_series(results: Sequence[AnalysisResult], limit: int = 5) -> list[dict[str, Any]]:
    """
    Per-label percentages for the most recent results, oldest first.

    `results` is newest first (session order); the newest is named
    "Text <len(results)>".
    """
    total = len(results)
    series = [
        {
            "name": f"Text {total - idx}",
            "positive": to_percent(r.score_for("POSITIVE")),
            "negative": to_percent(r.score_for("NEGATIVE")),
            "neutral": to_percent(r.score_for("NEUTRAL")),
        }
        for idx, r in enumerate(results[:limit])
    ]
    series.reverse()
    return series
