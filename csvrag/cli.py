# csvrag/cli.py
"""
Command line runner for the CSV knowledge-base retriever.
Answers queries without starting FastAPI.

- ask:   answer one query and print the reply with its sources
- batch: answer every query in a CSV or .xlsx ``Query`` column and write a
         strict two-column CSV with headers: Query, Source
"""

from __future__ import annotations
import argparse
import asyncio
import sys
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pandas as pd
from loguru import logger

from csvrag.config import DEFAULT_TOP_K, EngineConfig
from csvrag.engine import init, query
from csvrag.errors import LoadError
from csvrag.index import Index
from csvrag.normalize import normalize_whitespace


def load_queries(path: Path) -> List[str]:
    ext = path.suffix.lower()
    if ext == ".xls":
        raise ValueError(f"Legacy .xls workbooks are not supported, save {path} as .xlsx or CSV")
    df = pd.read_excel(path) if ext == ".xlsx" else pd.read_csv(path)
    cols = {c.lower(): c for c in df.columns}
    qcol = cols.get("query")
    if not qcol:
        raise ValueError(f"Expected column 'Query' in {path}. Found: {list(df.columns)}")
    queries = df[qcol].fillna("").astype(str).map(normalize_whitespace)
    return [q for q in queries.tolist() if q]


def _dedup_preserve_order(seq: List[str]) -> List[str]:
    seen = set()
    out: List[str] = []
    for s in seq:
        if s not in seen:
            seen.add(s)
            out.append(s)
    return out


def write_two_column_csv(preds: Dict[str, List[str]], out_path: Path) -> None:
    """
    Write exactly two columns:
      - Query
      - Source

    Each (query, source label) becomes a row, in rank order.
    """
    rows: List[Tuple[str, str]] = []
    for q, sources in preds.items():
        for s in sources:
            rows.append((q, s))
    df = pd.DataFrame(rows, columns=["Query", "Source"])
    out_path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(out_path, index=False)


def run_batch(index: Index, queries: List[str], k: int) -> Dict[str, List[str]]:
    # identical queries are answered once and fanned out
    unique_preds: Dict[str, List[str]] = {}
    for uq in _dedup_preserve_order(queries):
        unique_preds[uq] = query(index, uq, k=k).sources
    return {q: unique_preds[q] for q in queries}


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="csvrag")
    ap.add_argument("--business", type=str, default=None, help="business CSV path or URL")
    ap.add_argument("--faq", type=str, default=None, help="FAQ CSV path or URL")
    sub = ap.add_subparsers(dest="command", required=True)

    ask = sub.add_parser("ask", help="answer a single query")
    ask.add_argument("query", nargs="+")
    ask.add_argument("-k", type=int, default=DEFAULT_TOP_K, help=f"max hits (default {DEFAULT_TOP_K})")

    batch = sub.add_parser("batch", help="answer every query in a file")
    batch.add_argument("--in", dest="inp", type=str, required=True, help="CSV or .xlsx file with a Query column")
    batch.add_argument("--out", dest="out", type=str, default="artifacts/answers.csv")
    batch.add_argument("-k", type=int, default=DEFAULT_TOP_K, help=f"max hits (default {DEFAULT_TOP_K})")
    return ap


def _config_from_args(args: argparse.Namespace) -> EngineConfig:
    config = EngineConfig.from_env()
    updates = {}
    if args.business:
        updates["business_source_path"] = args.business
    if args.faq:
        updates["faq_source_path"] = args.faq
    return config.model_copy(update=updates)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.k < 1:
        print("k must be at least 1", file=sys.stderr)
        return 2

    try:
        index = asyncio.run(init(_config_from_args(args)))
    except LoadError as e:
        logger.error("Could not load knowledge base: {}", e)
        return 1

    if args.command == "ask":
        out = query(index, " ".join(args.query), k=args.k)
        print(out.answer)
        if out.sources:
            print()
            print("Sources: " + ", ".join(out.sources))
        return 0

    queries = load_queries(Path(args.inp))
    print(f"Loaded {len(queries)} queries from {args.inp}")
    preds = run_batch(index, queries, args.k)
    out_path = Path(args.out)
    write_two_column_csv(preds, out_path)
    total_rows = sum(len(v) for v in preds.values())
    print(f"Wrote {total_rows} rows to {out_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
