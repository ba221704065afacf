"""Read-side history queries."""

from playlog.history.queries import HistoryQueries
from playlog.history.schemas import MonthlyPlays, TopTrack, TopTracksPage, TopTracksQuery

__all__ = ["HistoryQueries", "MonthlyPlays", "TopTrack", "TopTracksPage", "TopTracksQuery"]
