"""Tests for configuration helpers."""

import pytest
from pydantic import ValidationError

from csvrag.config import DEFAULT_TOP_K, FALLBACK_TOP_K, QueryRequest, read_top_k


@pytest.mark.parametrize("raw", [None, "", "   ", "0", "-2", "three", "2.5"])
def test_invalid_top_k_falls_back(raw):
    assert read_top_k(raw) == FALLBACK_TOP_K


def test_valid_top_k_is_used():
    assert read_top_k("5") == 5
    assert read_top_k(" 1 ") == 1


def test_default_top_k_is_positive():
    assert DEFAULT_TOP_K >= 1
    assert QueryRequest(query="fees").k == DEFAULT_TOP_K


def test_query_request_validates_k_and_toggle():
    assert QueryRequest(query="fees").use_rag is True
    assert QueryRequest(query="fees", use_rag=False).use_rag is False
    with pytest.raises(ValidationError):
        QueryRequest(query="fees", k=0)
