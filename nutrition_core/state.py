from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

from nutrition_core.errors import UnknownRegionError
from nutrition_core.models import LoadReport, RegionSummary


logger = logging.getLogger(__name__)


class LoadStatus(str, Enum):
    LOADING = "loading"
    READY = "ready"
    UNAVAILABLE = "unavailable"


Listener = Callable[["DashboardState"], None]


class DashboardState:
    """Loaded summaries plus the currently selected region.

    ``select`` is the only mutation; listeners registered with ``subscribe``
    are called after every change of selection. Summaries are fixed for the
    lifetime of the state; reloading means building a new state.
    """

    def __init__(
        self,
        summaries: Sequence[RegionSummary] = (),
        *,
        status: LoadStatus = LoadStatus.LOADING,
        selected_region: Optional[str] = None,
        report: Optional[LoadReport] = None,
        error: Optional[str] = None,
    ):
        self._summaries: Tuple[RegionSummary, ...] = tuple(summaries)
        self._by_region = {s.region: s for s in self._summaries}
        self._status = status
        self._report = report or LoadReport()
        self._error = error
        self._listeners: List[Listener] = []
        if selected_region is not None and selected_region not in self._by_region:
            raise UnknownRegionError(selected_region)
        self._selected = selected_region if selected_region is not None else self.default_region

    @classmethod
    def ready(cls, summaries: Sequence[RegionSummary], report: Optional[LoadReport] = None) -> "DashboardState":
        return cls(summaries, status=LoadStatus.READY, report=report)

    @classmethod
    def unavailable(cls, error: Optional[str] = None) -> "DashboardState":
        return cls((), status=LoadStatus.UNAVAILABLE, error=error)

    @property
    def status(self) -> LoadStatus:
        return self._status

    @property
    def is_ready(self) -> bool:
        return self._status is LoadStatus.READY

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def report(self) -> LoadReport:
        return self._report

    @property
    def summaries(self) -> Tuple[RegionSummary, ...]:
        return self._summaries

    @property
    def regions(self) -> List[str]:
        return [s.region for s in self._summaries]

    @property
    def default_region(self) -> Optional[str]:
        return self._summaries[0].region if self._summaries else None

    @property
    def selected_region(self) -> Optional[str]:
        return self._selected

    @property
    def selected_summary(self) -> Optional[RegionSummary]:
        if self._selected is None:
            return None
        return self._by_region[self._selected]

    def summary_for(self, region: str) -> RegionSummary:
        try:
            return self._by_region[region]
        except KeyError:
            raise UnknownRegionError(region) from None

    def select(self, region: str) -> RegionSummary:
        summary = self.summary_for(region)
        if region != self._selected:
            self._selected = region
            logger.debug("Selected region %s", region)
            for listener in list(self._listeners):
                listener(self)
        return summary

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; the returned callable unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
