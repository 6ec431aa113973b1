from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional, Sequence

from sentiment_dashboard.chart_data import distribution_slices
from sentiment_dashboard.exporters import select_export, write_export
from sentiment_dashboard.explanation import explain
from sentiment_dashboard.lexicon import DEFAULT_LEXICON, load_lexicon
from sentiment_dashboard.models import TextDocument
from sentiment_dashboard.sentiment_model import RuleBasedSentimentModel, SentimentModelConfig
from sentiment_dashboard.session import analyze_text, load_document, reset
from sentiment_dashboard.settings import load_settings
from sentiment_dashboard.text_input import InvalidFileTypeError, load_text_file

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)


def main(argv: Optional[Sequence[str]] = None) -> int:
    s = load_settings()
    args = list(sys.argv[1:] if argv is None else argv)
    input_path = args[0] if args else s.input_path

    if input_path:
        try:
            document = load_text_file(input_path)
        except (InvalidFileTypeError, OSError) as e:
            logger.error("Cannot analyze %s: %s", input_path, e)
            return 2
    else:
        document = TextDocument(text=sys.stdin.read())

    lexicon = load_lexicon(s.lexicon_path) if s.lexicon_path else DEFAULT_LEXICON
    model = RuleBasedSentimentModel(SentimentModelConfig(lexicon=lexicon))

    state = load_document(reset(), document)
    state = analyze_text(
        state,
        model,
        delay_sec=s.simulated_delay_sec,
        history_limit=s.history_limit,
    )
    if state.current is None:
        logger.warning("Nothing analyzed: input is empty")
        return 1

    result = state.current
    explanation = explain(result, lexicon)

    # Minimal output for inspection (CLI only)
    summary = {
        "source": state.source_name,
        "primary_sentiment": result.primary.label,
        "confidence": result.confidence,
        "distribution": distribution_slices(result),
        "keywords": list(result.keywords),
        "explanation": explanation.summary(),
        "indicators": [
            {"type": i.type, "description": i.description, "impact": i.impact}
            for i in explanation.indicators
        ],
        "model_version": model.model_version,
    }
    print(json.dumps(summary, ensure_ascii=False, indent=2))

    to_export = select_export(state.current, state.results)
    now = datetime.now(timezone.utc)
    for fmt in s.export_format_list():
        path = write_export(to_export, fmt, s.export_dir, now=now, wrap_chars=s.pdf_wrap_chars)
        logger.info("Wrote %s export: %s", fmt, path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
