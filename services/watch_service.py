import time
from pathlib import Path
from typing import Optional, Union

import aiohttp

from core.config import settings
from core.interfaces import IContentExtractor, IContentFetcher, INotifier
from core.logger import get_logger
from models.run import RunMode, RunResult, TargetError
from repositories.fingerprint_repo import FingerprintRepository
from services.components.cache_buster import TokenGenerator, random_token
from services.components.change_detector import ChangeDetector
from services.scraper.fetcher import PageFetcher
from services.scraper.parser import ContentExtractor

logger = get_logger(__name__)


class WatchService:
    """
    Runs one detection pass over every target in the fingerprint store:
    load -> snapshot -> detect per key -> persist -> RunResult.
    """

    def __init__(
        self,
        store_path: Union[str, Path],
        mode: RunMode = RunMode.CHECK,
        notifier: Optional[INotifier] = None,
        fetcher: Optional[IContentFetcher] = None,
        extractor: Optional[IContentExtractor] = None,
        token_generator: TokenGenerator = random_token,
    ):
        self.repo = FingerprintRepository(store_path)
        self.mode = mode
        self.fetcher = fetcher or PageFetcher()

        # Baseline runs never alert
        if mode == RunMode.INIT:
            notifier = None

        self.detector = ChangeDetector(
            fetcher=self.fetcher,
            extractor=extractor or ContentExtractor(),
            notifier=notifier,
            token_generator=token_generator,
            cache_bust_param=settings.CACHE_BUST_PARAM,
        )

    async def _open_session(self) -> Optional[aiohttp.ClientSession]:
        if isinstance(self.fetcher, PageFetcher):
            return await self.fetcher.create_session()
        return None

    async def run(self) -> RunResult:
        """
        Raises:
            StoreException: store could not be loaded or persisted (fatal)
        """
        started = time.monotonic()
        if self.mode == RunMode.INIT:
            logger.info("[WATCH] Initializing hashes (baseline mode, no alerts)...")

        snapshot = self.repo.snapshot()
        result = RunResult(mode=self.mode, store_path=str(self.repo.path))

        keys = list(snapshot.working)
        logger.info(f"[WATCH] Processing {len(keys)} targets sequentially...")

        session = await self._open_session()
        try:
            for key in keys:
                report = await self.detector.process(session, key, snapshot.working, self.mode)
                result.reports.append(report)
                if report.outcome.is_error:
                    result.errors.append(
                        TargetError(key=key, outcome=report.outcome, message=report.error or "")
                    )
        finally:
            if session is not None:
                await session.close()

        self.repo.persist(snapshot.working)

        if self.mode == RunMode.CHECK:
            result.changed = bool(snapshot.changed_keys())

        elapsed_ms = (time.monotonic() - started) * 1000
        logger.info(
            f"[WATCH] Complete. changed={result.changed} errors={len(result.errors)}",
            context=result.count_by_outcome(),
            duration_ms=elapsed_ms,
        )
        return result
