from __future__ import annotations

"""
Engine entry points: build an index from the two sources, answer queries.

Two layers are offered:

* :func:`init` / :func:`query`: plain functions over an explicit
  :class:`~csvrag.index.Index` value.  ``init`` is a coroutine that loads
  both sources concurrently and then builds the index synchronously;
  ``query`` is pure and never raises for any query text.
* :class:`RetrievalEngine`: a small holder that owns the current index
  and swaps it wholesale on re-initialization.  Callers that only need
  one index can skip it and keep the ``Index`` themselves.

Example::

    import asyncio
    from csvrag.config import EngineConfig
    from csvrag.engine import init, query

    index = asyncio.run(init(EngineConfig()))
    print(query(index, "custody fees", k=2).answer)

"""

import asyncio
from typing import Optional

import httpx
from loguru import logger

from .answer import Answer, format_answer
from .config import DEFAULT_TOP_K, EngineConfig
from .corpus import build_documents
from .errors import EngineNotReady, LoadError
from .index import Index, build_index
from .retrieval import retrieve
from .sources import load_table


async def init(
    config: EngineConfig,
    client: Optional[httpx.AsyncClient] = None,
) -> Index:
    """
    Load both sources and build a fresh index.

    Both loads run concurrently and must both succeed; otherwise the
    first failure is raised and nothing is built.
    """
    results = await asyncio.gather(
        load_table(config.business_source_path, client),
        load_table(config.faq_source_path, client),
        return_exceptions=True,
    )
    for result in results:
        if isinstance(result, BaseException):
            raise result
    business, faq = results

    documents = build_documents(business.records, faq.records)
    return build_index(documents)


def query(index: Index, text: str, k: int = DEFAULT_TOP_K) -> Answer:
    """Answer ``text`` from ``index``; always returns a well-formed answer."""
    return format_answer(text, retrieve(index, text or "", k=k))


class RetrievalEngine:
    """
    Owner of the current index.

    ``init`` replaces the index reference only after a successful build,
    so readers never see a half-built index and a failed reload keeps
    the previous one serving.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.config = config or EngineConfig.from_env()
        self._client = client
        self._index: Optional[Index] = None

    @property
    def index(self) -> Optional[Index]:
        return self._index

    @property
    def ready(self) -> bool:
        return self._index is not None

    @property
    def document_count(self) -> int:
        return self._index.n if self._index is not None else 0

    async def init(self) -> Index:
        try:
            index = await init(self.config, self._client)
        except LoadError as e:
            logger.warning("Engine init failed: {}", e)
            raise
        self._index = index
        logger.info("Engine ready with {} documents", index.n)
        return index

    def query(self, text: str, k: int = DEFAULT_TOP_K) -> Answer:
        index = self._index
        if index is None:
            raise EngineNotReady("Engine has no index; call init() first")
        return query(index, text, k=k)
