from __future__ import annotations

from collections.abc import Iterable, Mapping

from ..models.field_spec import FieldKind, FieldSpec, ResourceSchema

"""Resource schema tables.

One ResourceSchema per tracked resource. These tables are the only place
where header aliases, enum vocabularies and fallback defaults are declared;
the normalizer itself has no per-resource code.
"""

__all__ = [
    "ANIME",
    "MOVIE",
    "KDRAMA",
    "GAME",
    "GENSHIN",
    "CREDENTIAL",
    "WEBSITE",
    "RESOURCE_SCHEMAS",
    "get_schema",
    "resource_names",
]


def _synonyms(members: Iterable[str], extra: Mapping[str, str]) -> dict[str, str]:
    """Synonym table containing the lowercase spelling of every member plus extras."""
    table = {m.lower(): m for m in members}
    table.update(extra)
    return table


def _title(name: str, *more: str) -> FieldSpec:
    return FieldSpec(name, ("title", "Title", "name", "Name", *more))


def _rating() -> FieldSpec:
    return FieldSpec("rating", ("rating", "Rating", "score", "Score"), FieldKind.INTEGER)


def _image(glyph: str) -> FieldSpec:
    return FieldSpec("image", ("image", "Image", "poster", "Poster", "icon", "Icon"), FieldKind.EMOJI_OR_URL, glyph)


def _year() -> FieldSpec:
    return FieldSpec("year", ("year", "Year", "release year", "Release Year"), FieldKind.INTEGER)


# Anime ----------------------------------------------------------------------

ANIME_WATCH_STATUS = ("Watch Later", "Watching", "Dropped", "Completed", "On Hold", "Yet to Air")

ANIME = ResourceSchema(
    name="anime",
    endpoint="/anime",
    label="Anime",
    fields=(
        FieldSpec("anime", ("anime", "Anime", "title", "Title", "name", "Name", "Anime Title")),
        FieldSpec(
            "watchStatus",
            ("watchStatus", "WatchStatus", "Watch Status", "watch status", "status", "Status"),
            FieldKind.ENUM,
            "Watch Later",
            enum_values=ANIME_WATCH_STATUS,
            synonyms=_synonyms(
                ANIME_WATCH_STATUS,
                {
                    "ongoing": "Watching",
                    "on-going": "Watching",
                    "On-Going": "Watching",
                    "currently watching": "Watching",
                    "in progress": "Watching",
                    "complete": "Completed",
                    "finished": "Completed",
                    "watched": "Completed",
                    "done": "Completed",
                    "drop": "Dropped",
                    "on-hold": "On Hold",
                    "onhold": "On Hold",
                    "paused": "On Hold",
                    "plan to watch": "Watch Later",
                    "planned": "Watch Later",
                    "ptw": "Watch Later",
                    "later": "Watch Later",
                    "upcoming": "Yet to Air",
                    "not yet aired": "Yet to Air",
                    "not aired": "Yet to Air",
                },
            ),
        ),
        FieldSpec(
            "episodeOn",
            ("episodeOn", "Episode On", "episode", "Episode", "episodes", "Episodes", "Current Episode"),
            FieldKind.INTEGER,
        ),
        FieldSpec(
            "totalEpisode",
            ("totalEpisode", "totalEpisodes", "Total Episode", "Total Episodes", "total", "Total"),
            FieldKind.INTEGER,
        ),
        _rating(),
        _image("🎌"),
    ),
)

# Movies / web series --------------------------------------------------------

MOVIE_STATUS = ("Watching", "Watched", "Completed", "Plan to Watch")
MOVIE_TYPE = ("Movie", "Series", "K Drama")

MOVIE = ResourceSchema(
    name="movie",
    endpoint="/movies",
    label="Movies & Series",
    fields=(
        _title("title"),
        FieldSpec(
            "type",
            ("type", "Type", "category", "Category"),
            FieldKind.ENUM,
            "Movie",
            enum_values=MOVIE_TYPE,
            synonyms=_synonyms(
                MOVIE_TYPE,
                {
                    "film": "Movie",
                    "movies": "Movie",
                    "show": "Series",
                    "tv": "Series",
                    "tv show": "Series",
                    "tv series": "Series",
                    "web series": "Series",
                    "k-drama": "K Drama",
                    "kdrama": "K Drama",
                    "K-Drama": "K Drama",
                    "korean drama": "K Drama",
                },
            ),
        ),
        FieldSpec(
            "status",
            ("status", "Status"),
            FieldKind.ENUM,
            "Plan to Watch",
            enum_values=MOVIE_STATUS,
            synonyms=_synonyms(
                MOVIE_STATUS,
                {
                    "ongoing": "Watching",
                    "in progress": "Watching",
                    "seen": "Watched",
                    "complete": "Completed",
                    "finished": "Completed",
                    "ptw": "Plan to Watch",
                    "planned": "Plan to Watch",
                    "watch later": "Plan to Watch",
                    "to watch": "Plan to Watch",
                },
            ),
        ),
        _year(),
        _rating(),
        _image("🎬"),
    ),
)

# K-Drama ---------------------------------------------------------------------

KDRAMA_STATUS = ("Watching", "Completed", "Plan to Watch", "On Hold")

KDRAMA = ResourceSchema(
    name="kdrama",
    endpoint="/kdrama",
    label="K-Drama",
    fields=(
        _title("title", "drama", "Drama"),
        FieldSpec(
            "status",
            ("status", "Status"),
            FieldKind.ENUM,
            "Plan to Watch",
            enum_values=KDRAMA_STATUS,
            synonyms=_synonyms(
                KDRAMA_STATUS,
                {
                    "ongoing": "Watching",
                    "in progress": "Watching",
                    "complete": "Completed",
                    "finished": "Completed",
                    "watched": "Completed",
                    "ptw": "Plan to Watch",
                    "planned": "Plan to Watch",
                    "watch later": "Plan to Watch",
                    "on-hold": "On Hold",
                    "onhold": "On Hold",
                    "paused": "On Hold",
                },
            ),
        ),
        _year(),
        FieldSpec("episodes", ("episodes", "Episodes", "episode", "Episode"), FieldKind.INTEGER),
        _rating(),
        _image("🇰🇷"),
    ),
)

# Games -----------------------------------------------------------------------

GAME_STATUS = ("Playing", "Completed", "On Hold", "Plan to Play")

GAME = ResourceSchema(
    name="game",
    endpoint="/games",
    label="Games",
    fields=(
        _title("title", "game", "Game"),
        FieldSpec("platform", ("platform", "Platform", "console", "Console"), FieldKind.TEXT, "PC"),
        FieldSpec(
            "status",
            ("status", "Status"),
            FieldKind.ENUM,
            "Plan to Play",
            enum_values=GAME_STATUS,
            synonyms=_synonyms(
                GAME_STATUS,
                {
                    "ongoing": "Playing",
                    "in progress": "Playing",
                    "currently playing": "Playing",
                    "complete": "Completed",
                    "finished": "Completed",
                    "beaten": "Completed",
                    "on-hold": "On Hold",
                    "onhold": "On Hold",
                    "paused": "On Hold",
                    "backlog": "Plan to Play",
                    "planned": "Plan to Play",
                    "wishlist": "Plan to Play",
                },
            ),
        ),
        _rating(),
        _image("🎮"),
    ),
)

# Genshin Impact characters ---------------------------------------------------

GENSHIN_ELEMENTS = ("Cryo", "Electro", "Pyro", "Hydro", "Dendro", "Geo", "Anemo")

GENSHIN = ResourceSchema(
    name="genshin",
    endpoint="/genshin",
    label="Genshin Impact",
    fields=(
        FieldSpec("name", ("name", "Name", "character", "Character")),
        FieldSpec(
            "element",
            ("element", "Element", "vision", "Vision"),
            FieldKind.ENUM,
            "Cryo",
            enum_values=GENSHIN_ELEMENTS,
            synonyms=_synonyms(
                GENSHIN_ELEMENTS,
                {
                    "cyro": "Cryo",
                    "Cyro": "Cryo",
                    "ice": "Cryo",
                    "lightning": "Electro",
                    "fire": "Pyro",
                    "water": "Hydro",
                    "grass": "Dendro",
                    "nature": "Dendro",
                    "rock": "Geo",
                    "earth": "Geo",
                    "wind": "Anemo",
                    "air": "Anemo",
                },
            ),
        ),
        FieldSpec("rarity", ("rarity", "Rarity", "stars", "Stars"), FieldKind.INTEGER, 4),
        FieldSpec(
            "characterLevel",
            ("characterLevel", "Character Level", "level", "Level", "lvl", "Lvl"),
            FieldKind.INTEGER,
            1,
        ),
        FieldSpec("constellation", ("constellation", "Constellation", "C", "cons"), FieldKind.INTEGER),
        _image("⚔️"),
    ),
)

# Credentials -----------------------------------------------------------------

CREDENTIAL = ResourceSchema(
    name="credential",
    endpoint="/credentials",
    label="Credentials",
    fields=(
        FieldSpec("service", ("service", "Service", "name", "Name", "website", "Website")),
        FieldSpec("username", ("username", "Username", "email", "Email", "user", "User")),
        FieldSpec("password", ("password", "Password")),
        FieldSpec("category", ("category", "Category", "type", "Type"), FieldKind.TEXT, "Other"),
    ),
)

# Bookmarked websites ---------------------------------------------------------

WEBSITE = ResourceSchema(
    name="website",
    endpoint="/websites",
    label="Websites",
    fields=(
        FieldSpec("name", ("name", "Name", "title", "Title", "site", "Site")),
        FieldSpec("category", ("category", "Category"), FieldKind.TEXT, "General"),
        FieldSpec("description", ("description", "Description", "notes", "Notes")),
        FieldSpec("link", ("link", "Link", "url", "URL", "Url")),
    ),
)


RESOURCE_SCHEMAS: dict[str, ResourceSchema] = {
    s.name: s for s in (ANIME, MOVIE, KDRAMA, GAME, GENSHIN, CREDENTIAL, WEBSITE)
}

# CLI / config spellings accepted for resource names
_RESOURCE_ALIASES = {
    "movies": "movie",
    "series": "movie",
    "k-drama": "kdrama",
    "games": "game",
    "credentials": "credential",
    "websites": "website",
}


def resource_names() -> list[str]:
    return list(RESOURCE_SCHEMAS)


def get_schema(name: str) -> ResourceSchema:
    """Look up a schema by resource name (case-insensitive, plural accepted).

    Raises:
        KeyError: unknown resource name
    """
    key = name.strip().lower()
    key = _RESOURCE_ALIASES.get(key, key)
    try:
        return RESOURCE_SCHEMAS[key]
    except KeyError:
        raise KeyError(f"unknown resource '{name}' (expected one of {resource_names()})") from None
