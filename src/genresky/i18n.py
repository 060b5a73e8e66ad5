"""Simple two-language (en/ko) translation helper."""

_STRINGS: dict[str, dict[str, str]] = {
    "page_title": {
        "ko": "장르 밤하늘",
        "en": "GenreSky",
    },
    "label_title": {
        "ko": "제목",
        "en": "Title",
    },
    "label_popularity": {
        "ko": "인기도",
        "en": "Popularity",
    },
    "label_revenue": {
        "ko": "수익",
        "en": "Revenue",
    },
    "label_upload": {
        "ko": "영화 CSV 파일",
        "en": "Movie CSV file",
    },
    "label_mode": {
        "ko": "배치 방식",
        "en": "Layout",
    },
    "placeholder": {
        "ko": "영화 CSV 파일을 불러오면 장르별 별자리가 그려져요",
        "en": "Load a movie CSV to draw one constellation per genre",
    },
    "hint_select": {
        "ko": "별을 클릭하면 영화 정보가 보여요",
        "en": "Click a star to see the movie",
    },
    "no_selection": {
        "ko": "선택한 별이 없어요",
        "en": "No star under the pointer",
    },
    "summary": {
        "ko": "영화 {movies}편 · 장르 {genres}개",
        "en": "{movies} movies · {genres} genres",
    },
}


def t(key: str, lang: str) -> str:
    """Return the translated string for key in lang.

    Falls back to 'en', then to the key itself if not found.
    """
    entry = _STRINGS.get(key)
    if entry is None:
        return key
    return entry.get(lang) or entry.get("en") or key
