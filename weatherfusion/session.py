# ABOUTME: Event-handling layer that threads immutable session state through user actions.
# ABOUTME: Gates weather fetches on resolution results and discards superseded search responses.

import logging

from pydantic import BaseModel, ConfigDict

from weatherfusion.config import Unit
from weatherfusion.deps import WeatherDeps
from weatherfusion.errors import FetchFailed, LocationNotFound, ResolutionFailed
from weatherfusion.fusion import fuse
from weatherfusion.models import FusedResult
from weatherfusion.weather_service import fetch_all, resolve_locations

logger = logging.getLogger(__name__)


class SessionState(BaseModel):
    """Snapshot of one user's session. Replaced wholesale, never mutated."""

    model_config = ConfigDict(frozen=True)

    last_resolved_ok: bool = False
    unit: Unit = Unit.METRIC
    request_seq: int = 0
    last_query: str = ""
    result: FusedResult | None = None


class CandidateListView(BaseModel):
    """Candidate display strings for the selection list, in provider order."""

    query: str
    candidates: list[str] = []
    error: str | None = None


class SearchView(BaseModel):
    """Outcome of a search submission for the presentation layer.

    `result` is the record to display: the new one on success, the previous one otherwise.
    """

    result: FusedResult | None = None
    show_validation_indicator: bool = False
    fetch_failed: bool = False
    error: str | None = None


class WeatherSession:
    """Owns the session state and handles query input, search submission, and unit toggles."""

    def __init__(self, deps: WeatherDeps, state: SessionState | None = None):
        self.deps = deps
        self.state = state or SessionState()

    def _update(self, **changes) -> SessionState:
        self.state = self.state.model_copy(update=changes)
        return self.state

    async def on_query_input(self, query: str) -> CandidateListView | None:
        """Resolve the current input text.

        Returns None without any request for an empty query, and None when a newer
        input has been dispatched while this one was in flight.
        """
        if not query:
            return None

        seq = self._update(request_seq=self.state.request_seq + 1).request_seq
        try:
            candidates = await resolve_locations(self.deps.http_client, self.deps.settings, query)
        except ResolutionFailed as e:
            if seq != self.state.request_seq:
                logger.debug("Discarding failed resolution #%d for %r, superseded", seq, query)
                return None
            logger.warning("Resolution failed for %r: %s", query, e)
            self._update(last_query=query, last_resolved_ok=False)
            return CandidateListView(query=query, error=str(e))

        if seq != self.state.request_seq:
            logger.debug("Discarding resolution #%d for %r, superseded by #%d", seq, query, self.state.request_seq)
            return None

        self._update(last_query=query, last_resolved_ok=bool(candidates))
        return CandidateListView(query=query, candidates=[c.display_name for c in candidates])

    async def on_search_submit(self, query: str) -> SearchView:
        """Fetch and fuse weather for the query, or signal the validation indicator.

        No request is issued unless the latest resolution was for this same query and
        found at least one candidate.
        """
        if not self.state.last_resolved_ok or not query or query != self.state.last_query:
            logger.warning("Search for %r blocked, no resolved location", query)
            return SearchView(result=self.state.result, show_validation_indicator=True)

        try:
            conditions, sun_times = await fetch_all(self.deps.http_client, self.deps.settings, query)
        except LocationNotFound as e:
            logger.warning("%s", e)
            return SearchView(result=self.state.result, show_validation_indicator=True, error=str(e))
        except FetchFailed as e:
            logger.exception("Weather fetch failed for %r", query)
            return SearchView(result=self.state.result, fetch_failed=True, error=str(e))

        # Fuse with the unit active now, a toggle may have happened while fetching
        result = fuse(conditions.location, conditions, sun_times, self.state.unit)
        self._update(result=result)
        logger.info("Search for %r resolved to %s", query, result.name)
        return SearchView(result=result)

    async def on_unit_selected(self, unit: Unit, query: str) -> SearchView:
        """Switch the unit preference and rebuild the result from a fresh fetch."""
        self._update(unit=unit)
        return await self.on_search_submit(query)
