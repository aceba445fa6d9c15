"""Query pipeline: collect, filter, build, rank."""

import dataclasses
import logging
import time
from enum import Enum
from typing import Dict, List, Optional

from .cache import StaticCache
from .config import Config
from .exceptions import AppleScriptError, LaunchTimedOutError, SourceUnavailableError
from .matching import MatchEngine
from .models import INCOGNITO_SPACE_TITLE, PinnedTab, ResultItem, SpaceRecord, TabRecord, UnpinnedTab
from .monitoring import Collector, IncludeFlags, TabSource
from .ranking import Ranker
from .results import ResultBuilder, render
from .utils.text import normalize

logger = logging.getLogger(__name__)


class PipelineState(str, Enum):
    """Stages of a query run."""
    INIT = "init"
    SOURCE_CHECK = "source_check"
    LAUNCH = "launch"
    READY = "ready"
    COLLECT_STATIC = "collect_static"
    CACHE_CHECK = "cache_check"
    PRE_FILTER = "pre_filter"
    COLLECT_DYNAMIC = "collect_dynamic"
    BUILD = "build"
    POST_FILTER = "post_filter"
    RANK = "rank"
    EMIT = "emit"
    ERROR = "error"


class QueryPipeline:
    """Runs one query against a live tab source."""

    def __init__(
        self,
        config: Config,
        source: TabSource,
        cache: Optional[StaticCache] = None,
        collector: Optional[Collector] = None,
        clock=time.time,
    ):
        """
        Initialize the pipeline.

        Args:
            config: Workflow configuration
            source: Live tab source
            cache: Static record cache (built from config when caching is enabled)
            collector: Record collector (built from source and config by default)
            clock: Callable returning the current epoch time
        """
        self.config = config
        self.source = source
        if cache is None and config.use_cache:
            cache = StaticCache(config.cache_path, config.cache_ttl, clock=clock)
        self.cache = cache if config.use_cache else None
        self.collector = collector or Collector(source, launch_timeout=config.launch_timeout)
        self.matcher = MatchEngine(config.search_method)
        self.builder = ResultBuilder(cache_enabled=config.use_cache, icon_dir=config.icon_dir)
        self.ranker = Ranker(config.display_order)
        self.include = IncludeFlags(
            top_app=config.include_top_tabs,
            pinned=config.include_pinned_tabs,
            unpinned=config.include_unpinned_tabs,
            spaces=config.include_spaces,
        )
        self.state = PipelineState.INIT

    def _enter(self, state: PipelineState) -> None:
        logger.debug("Pipeline %s -> %s", self.state.value, state.value)
        self.state = state

    def run(self, query: str = "") -> List[ResultItem]:
        """
        Run the query and return the items to display.

        Never raises for a missing application; the problem is reported as a
        single error item instead.

        Args:
            query: Raw query typed by the user

        Returns:
            Ordered result items (never empty)
        """
        self.state = PipelineState.INIT
        query = normalize(query)
        app_name = self.source.app_name

        self._enter(PipelineState.SOURCE_CHECK)
        try:
            if not self.collector.check_source():
                self._enter(PipelineState.LAUNCH)
                self.collector.launch_and_wait()
        except SourceUnavailableError as e:
            logger.info("%s", e)
            self._enter(PipelineState.ERROR)
            return [self.builder.source_unavailable_item(app_name)]
        except LaunchTimedOutError as e:
            logger.warning("%s", e)
            self._enter(PipelineState.ERROR)
            return [self.builder.launch_timed_out_item(app_name)]
        self._enter(PipelineState.READY)

        try:
            if not query.strip() and self.include.spaces:
                items = self._spaces_only()
            else:
                items = self._full(query)
        except AppleScriptError as e:
            logger.warning("Failed to read tabs from %s: %s", app_name, e)
            self._enter(PipelineState.ERROR)
            return [self.builder.source_error_item(app_name, str(e))]

        self._enter(PipelineState.EMIT)
        if not items:
            return [self.builder.no_results_item(query, app_name)]
        return items

    def _spaces_only(self) -> List[ResultItem]:
        self._enter(PipelineState.COLLECT_STATIC)
        records = self.collector.collect_spaces_only()
        if not records:
            return []
        self._enter(PipelineState.COLLECT_DYNAMIC)
        dynamic = self.collector.collect_dynamic()
        self._enter(PipelineState.BUILD)
        items = self.builder.build(records, dynamic)
        self._enter(PipelineState.RANK)
        return self.ranker.rank(items)

    def _full(self, query: str) -> List[ResultItem]:
        self._enter(PipelineState.COLLECT_STATIC)
        records = self._static_records()
        # A window can only show one of the collected spaces
        space_titles = _space_titles(records)
        records = self.include.apply(records)
        if not records:
            return []

        has_query = bool(query.strip())
        if has_query:
            self._enter(PipelineState.PRE_FILTER)
            records = self.matcher.filter_records(
                records, query, lambda r: self.builder.possible_subtitles(r, space_titles)
            )
            if not records:
                return []

        self._enter(PipelineState.COLLECT_DYNAMIC)
        dynamic = self.collector.collect_dynamic()
        self._enter(PipelineState.BUILD)
        items = self.builder.build(records, dynamic)

        if has_query:
            self._enter(PipelineState.POST_FILTER)
            items = self.matcher.filter_items(items, query)

        self._enter(PipelineState.RANK)
        return self.ranker.rank(items)

    def _static_records(self) -> List[TabRecord]:
        """Collect every included type plus the spaces, which subtitles may name."""
        if self.cache is None:
            return self.collector.collect_static(dataclasses.replace(self.include, spaces=True))

        self._enter(PipelineState.CACHE_CHECK)
        records = self.cache.load()
        if records is None:
            logger.debug("Tab cache miss, collecting from %s", self.source.app_name)
            # Cache every type so the snapshot does not depend on the include flags
            records = self.collector.collect_static(IncludeFlags.all())
            self.cache.store(records)
        return records

    def render(self, items: List[ResultItem]) -> Dict[str, List[Dict]]:
        return render(items)


def _space_titles(records: List[TabRecord]) -> List[str]:
    titles = {INCOGNITO_SPACE_TITLE}
    for record in records:
        if isinstance(record, SpaceRecord):
            titles.add(record.title)
        elif isinstance(record, (PinnedTab, UnpinnedTab)):
            titles.add(record.space_title)
    return sorted(titles)
