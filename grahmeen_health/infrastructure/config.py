import os
import logging
from pathlib import Path

try:
    import streamlit as st  # type: ignore
    _HAS_STREAMLIT = True
except Exception:
    _HAS_STREAMLIT = False

logger = logging.getLogger(__name__)


def get_secret(name: str, default: str | None = None) -> str | None:
    # Prefer Streamlit secrets if available
    if _HAS_STREAMLIT:
        try:
            if name in st.secrets:
                return str(st.secrets.get(name))
        except Exception:
            # No secrets.toml present
            logger.debug("Streamlit secrets unavailable for %s", name)
    # Fallback to environment variables
    return os.environ.get(name, default)


class Settings:
    @property
    def data_dir(self) -> str:
        return get_secret("GRAHMEEN_DATA_DIR", ".streamlit") or ".streamlit"

    @property
    def users_path(self) -> str:
        return str(Path(self.data_dir) / "users.json")

    @property
    def assessments_path(self) -> str:
        return str(Path(self.data_dir) / "assessments.json")

    @property
    def assessment_store(self) -> str:
        return (get_secret("ASSESSMENT_STORE", "json") or "json").lower()

    @property
    def triage_strategy(self) -> str:
        return get_secret("TRIAGE_STRATEGY", "multi_factor") or "multi_factor"

    @property
    def google_places_api_key(self) -> str | None:
        return get_secret("GOOGLE_PLACES_API_KEY")

    @property
    def log_level(self) -> str:
        return (get_secret("LOG_LEVEL", "INFO") or "INFO").upper()
