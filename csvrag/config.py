"""
Configuration for the CSV knowledge-base retriever.
"""

import os
from pathlib import Path
from typing import FrozenSet, List, Optional, Tuple

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

# Paths
PROJECT_ROOT = Path(__file__).resolve().parents[1]
DATA_DIR = PROJECT_ROOT / "data"
BUSINESS_CSV_PATH = DATA_DIR / "business.csv"
FAQ_CSV_PATH = DATA_DIR / "faq_kb.csv"

# Environment overrides for the two sources (file path or http(s) URL)
ENV_BUSINESS_SOURCE = "CSVRAG_BUSINESS_SOURCE"
ENV_FAQ_SOURCE = "CSVRAG_FAQ_SOURCE"
ENV_TOP_K = "CSVRAG_TOP_K"

# Retrieval
FALLBACK_TOP_K = 3


def read_top_k(raw: Optional[str]) -> int:
    """Parse a top-k override; anything that is not a positive integer falls back."""
    if raw is None or not raw.strip():
        return FALLBACK_TOP_K
    try:
        k = int(raw)
    except ValueError:
        logger.warning("Ignoring {}={!r}: not an integer", ENV_TOP_K, raw)
        return FALLBACK_TOP_K
    if k < 1:
        logger.warning("Ignoring {}={}: must be at least 1", ENV_TOP_K, k)
        return FALLBACK_TOP_K
    return k


DEFAULT_TOP_K = read_top_k(os.getenv(ENV_TOP_K))

# Hits scoring at or below this are noise. Not exposed to callers.
MIN_SCORE = 0.08

# Corpus projection: which columns feed the indexed text, in order
BUSINESS_TEXT_FIELDS: Tuple[str, ...] = (
    "name",
    "category",
    "summary",
    "offerings",
    "keywords",
    "city",
    "state",
)
FAQ_TEXT_FIELDS: Tuple[str, ...] = ("topic", "content", "tags")

BUSINESS_ID_PREFIX = "biz_"
FAQ_ID_PREFIX = "faq_"

# Function words dropped from documents and queries alike
STOPWORDS: FrozenSet[str] = frozenset(
    {
        "the", "a", "an", "and", "or", "but", "if", "then", "else",
        "when", "what", "how", "why", "to", "of", "in", "on", "for",
        "with", "at", "by", "from", "as", "is", "are", "was", "were",
        "be", "been", "being", "this", "that", "these", "those", "it",
        "its", "we", "you", "your",
    }
)
MIN_TOKEN_LENGTH = 2

# HTTP hardening for remote sources
HTTP_CONNECT_TIMEOUT = 3.0
HTTP_READ_TIMEOUT = 7.0
HTTP_MAX_REDIRECTS = 2
HTTP_MAX_BYTES = 5_000_000
HTTP_USER_AGENT = "csvrag/1.0 (+knowledge-base retriever)"


# Pydantic schemas
class EngineConfig(BaseModel):
    business_source_path: str = str(BUSINESS_CSV_PATH)
    faq_source_path: str = str(FAQ_CSV_PATH)

    @classmethod
    def from_env(cls) -> "EngineConfig":
        return cls(
            business_source_path=os.getenv(ENV_BUSINESS_SOURCE, str(BUSINESS_CSV_PATH)),
            faq_source_path=os.getenv(ENV_FAQ_SOURCE, str(FAQ_CSV_PATH)),
        )

    def sources(self) -> List[str]:
        return [self.business_source_path, self.faq_source_path]


class QueryRequest(BaseModel):
    model_config = ConfigDict(validate_default=True)

    query: str
    k: int = Field(default=DEFAULT_TOP_K, ge=1)
    # false mirrors the widget with retrieval switched off
    use_rag: bool = True


class HealthResponse(BaseModel):
    status: str
    documents: int = Field(default=0, ge=0)
