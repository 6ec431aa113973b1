from __future__ import annotations

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

from sentiment_dashboard.exporters import EXPORT_FORMATS, ExportFormat


class DashboardSettings(BaseSettings):
    """
    Environment-driven settings for scoring, session history and exports.
    """

    model_config = SettingsConfigDict(env_prefix="", env_file=".env", extra="ignore")

    # ---- Session ----
    history_limit: int = Field(default=10, ge=1, alias="DASHBOARD_HISTORY_LIMIT")

    # Scoring is synchronous; > 0 only to mimic a remote model's latency.
    simulated_delay_sec: float = Field(default=0.0, ge=0.0, alias="DASHBOARD_SIMULATED_DELAY_SEC")

    # ---- Input ----
    # Text file to analyze; stdin is read when unset and no path is passed.
    input_path: Optional[str] = Field(default=None, alias="DASHBOARD_INPUT_PATH")

    # JSON object overriding word tables / weights (see lexicon.Lexicon)
    lexicon_path: Optional[str] = Field(default=None, alias="DASHBOARD_LEXICON_PATH")

    # ---- Export ----
    export_dir: str = Field(default="exports", alias="DASHBOARD_EXPORT_DIR")

    # comma separated subset of: csv,json,pdf (empty -> no export)
    export_formats: str = Field(default="csv,json,pdf", alias="DASHBOARD_EXPORT_FORMATS")

    pdf_wrap_chars: int = Field(default=95, ge=10, alias="DASHBOARD_PDF_WRAP_CHARS")

    def export_format_list(self) -> list[ExportFormat]:
        """
        Raises:
            ValueError: on a format outside csv/json/pdf
        """
        out: list[ExportFormat] = []
        for raw in self.export_formats.split(","):
            fmt = raw.strip().lower()
            if not fmt:
                continue
            if fmt not in EXPORT_FORMATS:
                raise ValueError(f"Unsupported export format: {fmt}")
            if fmt not in out:
                out.append(fmt)  # type: ignore[arg-type]
        return out


def load_settings() -> DashboardSettings:
    return DashboardSettings()
