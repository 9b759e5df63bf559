"""
Data models for track lookup and candidate matching.

This module defines the query built from the playing track's metadata,
the catalog search results it is compared against, and the scored
results produced by the ranker.

Design:
    All models are frozen dataclasses. A SearchCandidate is built once
    from the catalog response and never modified; the ranker wraps it in
    a ScoredCandidate instead of annotating it in place.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class LyricsQuery:
    """
    Metadata of the track to find lyrics for.

    Attributes:
        title: Track title. Never empty for queries built via from_metadata().
        artist: Artist string as reported by the player. May list several
                artists separated by ",", "&", "/", "、" and similar.
                Empty when unknown.
        album: Album name, empty when unknown.
    """

    title: str
    artist: str = ""
    album: str = ""

    @classmethod
    def from_metadata(
        cls,
        title: str | None,
        artist: str | None = None,
        album: str | None = None
    ) -> "LyricsQuery | None":
        """
        Build a query from raw player metadata.

        All fields are trimmed. A track without a title cannot be searched,
        so None is returned in that case.

        Example:
            LyricsQuery.from_metadata("  Lemon ", "米津玄師", None)
            -> LyricsQuery(title="Lemon", artist="米津玄師", album="")
        """
        title = (title or "").strip()
        if not title:
            return None
        return cls(
            title=title,
            artist=(artist or "").strip(),
            album=(album or "").strip(),
        )

    @property
    def search_text(self) -> str:
        """Non-blank fields joined by spaces, as sent to the catalog search."""
        return " ".join(
            field for field in (self.title, self.artist, self.album) if field.strip()
        )


@dataclass(frozen=True)
class SearchCandidate:
    """
    One catalog search result considered as a match for the query.

    Attributes:
        track_id: Provider-defined identifier used to fetch lyrics.
                  For NetEase this is the numeric song id.
        name: Primary song name.
        aliases: Alternate names (translations, subtitles).
                 Example: ("恋爱循环",) for "恋愛サーキュレーション"
        artists: Artist names in catalog order.
        album: Album name, empty when unknown.
    """

    track_id: Any
    name: str
    aliases: tuple[str, ...] = ()
    artists: tuple[str, ...] = ()
    album: str = ""

    @classmethod
    def from_netease_song(cls, song: dict[str, Any]) -> "SearchCandidate":
        """
        Create a SearchCandidate from a NetEase cloudsearch song record.

        Args:
            song: One element of result.songs from /api/cloudsearch/pc.
                  Relevant keys: id, name, alia (list of str),
                  ar (list of {"name": ...}), al ({"name": ...}).

        Returns:
            SearchCandidate populated from the record. Missing or null
            optional fields become empty values.
        """
        aliases = tuple(
            alias for alias in (song.get("alia") or []) if isinstance(alias, str)
        )

        artists_data = song.get("ar") or []
        artists = tuple(
            a.get("name", "") for a in artists_data
            if isinstance(a, dict) and a.get("name")
        )

        album_data = song.get("al")
        album = ""
        if isinstance(album_data, dict):
            album = album_data.get("name") or ""

        return cls(
            track_id=song.get("id"),
            name=song.get("name") or "",
            aliases=aliases,
            artists=artists,
            album=album,
        )

    @property
    def name_pool(self) -> list[str]:
        """Aliases plus primary name, blank entries removed."""
        return [name for name in (*self.aliases, self.name) if name.strip()]

    @property
    def artist_names(self) -> str:
        """Artist names joined by a single space, in catalog order."""
        return " ".join(self.artists)


@dataclass(frozen=True)
class ScoredCandidate:
    """
    A SearchCandidate with its composite similarity ratio.

    Attributes:
        candidate: The catalog result.
        ratio: Composite similarity in [0.0, 1.0].
    """

    candidate: SearchCandidate
    ratio: float

    @property
    def track_id(self) -> Any:
        return self.candidate.track_id
