"""SQLAlchemy queries for the read side of the plays table -- class-based."""

from sqlalchemy import ColumnElement, func, select
from sqlalchemy.orm import Session

from playlog.db.models import Play
from playlog.history.schemas import MonthlyPlays, TopTrack, TopTracksPage, TopTracksQuery


class HistoryQueries:
    """Stateless query builder for aggregate listening stats."""

    @staticmethod
    def plays_per_month(session: Session) -> list[MonthlyPlays]:
        """Play count for every (year, month) present, oldest first."""
        stmt = (
            select(Play.year, Play.month, func.count(Play.id).label("plays"))
            .group_by(Play.year, Play.month)
            .order_by(Play.year.asc(), Play.month.asc())
        )
        return [MonthlyPlays(year=row.year, month=row.month, plays=row.plays) for row in session.execute(stmt)]

    @staticmethod
    def _top_tracks_filters(query: TopTracksQuery) -> list[ColumnElement[bool]]:
        conditions: list[ColumnElement[bool]] = []
        if query.start is not None:
            conditions.append(Play.played_at >= query.start)
        if query.end is not None:
            conditions.append(Play.played_at <= query.end)
        if query.min_ms > 0:
            conditions.append(Play.ms_played >= query.min_ms)
        return conditions

    @staticmethod
    def top_tracks(session: Session, query: TopTracksQuery | None = None) -> TopTracksPage:
        """Most played track/artist/album groups, most plays first.

        Ties are ordered by name, artist and album so pages are stable.
        """
        query = query or TopTracksQuery()
        play_count = func.count(Play.id)
        grouped = (
            select(
                Play.track_name.label("name"),
                Play.artist_name.label("artist"),
                Play.album_name.label("album"),
                play_count.label("plays"),
            )
            .where(*HistoryQueries._top_tracks_filters(query))
            .group_by(Play.track_name, Play.artist_name, Play.album_name)
        )

        total = session.scalar(select(func.count()).select_from(grouped.subquery())) or 0

        page = (
            grouped.order_by(play_count.desc(), Play.track_name, Play.artist_name, Play.album_name)
            .limit(query.limit)
            .offset(query.offset)
        )
        rows = [
            TopTrack(name=row.name, artist=row.artist, album=row.album, plays=row.plays)
            for row in session.execute(page)
        ]
        return TopTracksPage(total=total, rows=rows)
