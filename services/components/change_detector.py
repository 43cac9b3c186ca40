"""
ChangeDetector component: fetch, extract, fingerprint and compare one target.
"""
from typing import Dict, Optional

import aiohttp

from core import constants
from core.exceptions import (
    FetchFailedException,
    MalformedKeyException,
    ParseFailedException,
    TargetException,
)
from core.interfaces import IContentExtractor, IContentFetcher, INotifier
from core.logger import get_logger
from models.run import RunMode, TargetOutcome, TargetReport
from services.components.cache_buster import TokenGenerator, random_token, with_cache_buster
from services.components.hash_calculator import HashCalculator
from services.components.target_resolver import TargetResolver
from services.notification.formatters import create_change_message

logger = get_logger(__name__)

_FAILURE_OUTCOMES = {
    MalformedKeyException: TargetOutcome.MALFORMED_KEY,
    FetchFailedException: TargetOutcome.FETCH_FAILED,
    ParseFailedException: TargetOutcome.PARSE_FAILED,
}


class ChangeDetector:
    """
    Decides, per target, between first observation, change and no change.

    Only reads and conditionally overwrites the single `working[key]` entry;
    loading and persisting the store belongs to the caller.
    """

    def __init__(
        self,
        fetcher: IContentFetcher,
        extractor: IContentExtractor,
        notifier: Optional[INotifier] = None,
        token_generator: TokenGenerator = random_token,
        cache_bust_param: str = constants.DEFAULT_CACHE_BUST_PARAM,
        resolver: Optional[TargetResolver] = None,
        hasher: Optional[HashCalculator] = None,
    ):
        """
        Args:
            fetcher: Retrieves the raw document
            extractor: Applies the extraction rule to the document
            notifier: Delivers change messages (None disables notifications)
            token_generator: Produces the cache-busting query token, one per call
            cache_bust_param: Query parameter name for the token
        """
        self.fetcher = fetcher
        self.extractor = extractor
        self.notifier = notifier
        self.token_generator = token_generator
        self.cache_bust_param = cache_bust_param
        self.resolver = resolver or TargetResolver()
        self.hasher = hasher or HashCalculator()

    async def process(
        self,
        session: Optional[aiohttp.ClientSession],
        key: str,
        working: Dict[str, str],
        mode: RunMode = RunMode.CHECK,
    ) -> TargetReport:
        """
        Runs the state transition for one store key.

        Per-target failures (malformed key, fetch, parse) are reported in the
        returned TargetReport and leave `working[key]` untouched.
        """
        try:
            return await self._process(session, key, working, mode)
        except TargetException as e:
            outcome = next(
                (o for exc_type, o in _FAILURE_OUTCOMES.items() if isinstance(e, exc_type)),
                TargetOutcome.FETCH_FAILED,
            )
            logger.warning(
                f"[DETECTOR] {outcome.value}: {e}. Skipping...",
                context={"key": repr(key)},
            )
            return TargetReport(key=key, outcome=outcome, error=str(e))

    async def _process(
        self,
        session: Optional[aiohttp.ClientSession],
        key: str,
        working: Dict[str, str],
        mode: RunMode,
    ) -> TargetReport:
        target = self.resolver.resolve(key)

        url = with_cache_buster(target.address, self.token_generator(), self.cache_bust_param)
        html = await self.fetcher.fetch_url(session, url)
        content_block = self.extractor.extract(html, target.extraction_rule)

        if mode == RunMode.INIT:
            line_count = content_block.count("\n")
            logger.info(f"[INIT] Number of newlines in content block for URL {target.address}: {line_count}")
            return TargetReport(
                key=key,
                outcome=TargetOutcome.BASELINE,
                address=target.address,
                line_count=line_count,
            )

        new_hash = self.hasher.calculate_hash(content_block)
        old_hash = working.get(key, constants.EMPTY_FINGERPRINT)

        if old_hash and old_hash == new_hash:
            logger.debug(f"[DETECTOR] No changes for {target.address}")
            return TargetReport(
                key=key,
                outcome=TargetOutcome.UNCHANGED,
                address=target.address,
                old_fingerprint=old_hash,
                new_fingerprint=new_hash,
            )

        outcome = TargetOutcome.CHANGED if old_hash else TargetOutcome.FIRST_OBSERVATION
        logger.warning(f"[DETECTOR] Content changed for URL: {target.address}", context={"outcome": outcome.value})

        notified = False
        if self.notifier and self.notifier.is_enabled():
            notified = await self.notifier.notify(session, create_change_message(target, outcome))

        working[key] = new_hash
        return TargetReport(
            key=key,
            outcome=outcome,
            address=target.address,
            old_fingerprint=old_hash,
            new_fingerprint=new_hash,
            notified=notified,
        )
