"""Localized keyword tables for the supported clippings languages."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Language(str, Enum):
    EN = "en"
    ES = "es"
    PT = "pt"
    DE = "de"
    FR = "fr"
    IT = "it"
    ZH = "zh"
    JA = "ja"
    KO = "ko"
    NL = "nl"
    RU = "ru"


FALLBACK_LANGUAGE = Language.EN


@dataclass(frozen=True, slots=True)
class LanguagePatterns:
    """Keyword alternates and date formats used by one language.

    Every keyword field is a tuple of alternates matched case-insensitively as
    substrings of the metadata line. Date formats use strftime-style
    directives and are tried in order, most specific first.
    """

    added_on: tuple[str, ...]
    highlight: tuple[str, ...]
    note: tuple[str, ...]
    bookmark: tuple[str, ...]
    clip: tuple[str, ...]
    page: tuple[str, ...]
    location: tuple[str, ...]
    date_formats: tuple[str, ...]

    def type_keywords(self) -> tuple[tuple[str, tuple[str, ...]], ...]:
        return (
            ("highlight", self.highlight),
            ("note", self.note),
            ("bookmark", self.bookmark),
            ("clip", self.clip),
        )


LANGUAGE_PATTERNS: dict[Language, LanguagePatterns] = {
    Language.EN: LanguagePatterns(
        added_on=("Added on",),
        highlight=("Your Highlight",),
        note=("Your Note",),
        bookmark=("Your Bookmark",),
        clip=("Your Clip",),
        page=("page",),
        location=("Location", "Loc."),
        date_formats=(
            "%A, %B %d, %Y %I:%M:%S %p",
            "%A, %d %B %Y %H:%M:%S",
            "%A, %B %d, %Y, %I:%M %p",
        ),
    ),
    Language.ES: LanguagePatterns(
        added_on=("Añadido el",),
        highlight=("subrayado",),
        note=("nota",),
        bookmark=("marcador",),
        clip=("recorte",),
        page=("página",),
        location=("posición", "ubicación"),
        date_formats=(
            "%A, %d de %B de %Y %H:%M:%S",
            "%A %d de %B de %Y %H:%M:%S",
        ),
    ),
    Language.PT: LanguagePatterns(
        added_on=("Adicionado em", "Adicionado:"),
        highlight=("Seu destaque", "Destaque"),
        note=("Sua nota", "Nota"),
        bookmark=("Seu marcador", "Marcador"),
        clip=("Seu recorte",),
        page=("página",),
        location=("posição",),
        date_formats=("%A, %d de %B de %Y %H:%M:%S",),
    ),
    Language.DE: LanguagePatterns(
        added_on=("Hinzugefügt am",),
        highlight=("Ihre Markierung",),
        note=("Ihre Notiz",),
        bookmark=("Ihr Lesezeichen",),
        clip=("Ihr Ausschnitt",),
        page=("Seite",),
        location=("Position",),
        date_formats=(
            "%A, %d. %B %Y %H:%M:%S",
            "%A, %d. %B %Y um %H:%M:%S",
        ),
    ),
    Language.FR: LanguagePatterns(
        added_on=("Ajouté le",),
        highlight=("Votre surlignage",),
        note=("Votre note",),
        bookmark=("Votre signet",),
        clip=("Votre extrait",),
        page=("page",),
        location=("emplacement",),
        date_formats=(
            "%A %d %B %Y %H:%M:%S",
            "%A %d %B %Y à %H:%M:%S",
        ),
    ),
    Language.IT: LanguagePatterns(
        added_on=("Aggiunto il",),
        highlight=("La tua evidenziazione",),
        note=("La tua nota",),
        bookmark=("Il tuo segnalibro",),
        clip=("Il tuo ritaglio",),
        page=("pagina",),
        location=("posizione",),
        date_formats=("%A %d %B %Y %H:%M:%S",),
    ),
    Language.ZH: LanguagePatterns(
        added_on=("添加于",),
        highlight=("您的标注", "标注"),
        note=("您的笔记", "笔记"),
        bookmark=("您的书签", "书签"),
        clip=("您的剪贴",),
        page=("页",),
        location=("位置",),
        date_formats=(
            "%Y年%m月%d日%A %p%I:%M:%S",
            "%Y年%m月%d日%A %H:%M:%S",
        ),
    ),
    Language.JA: LanguagePatterns(
        added_on=("追加日", "作成日"),
        highlight=("ハイライト",),
        note=("メモ",),
        bookmark=("ブックマーク",),
        clip=("クリップ",),
        page=("ページ",),
        location=("位置",),
        date_formats=("%Y年%m月%d日%A %H:%M:%S",),
    ),
    Language.KO: LanguagePatterns(
        added_on=("추가됨",),
        highlight=("하이라이트",),
        note=("메모",),
        bookmark=("북마크",),
        clip=("클립",),
        page=("페이지",),
        location=("위치",),
        date_formats=("%Y년 %m월 %d일 %A %p %I:%M:%S",),
    ),
    Language.NL: LanguagePatterns(
        added_on=("Toegevoegd op",),
        highlight=("Uw markering",),
        note=("Uw notitie",),
        bookmark=("Uw bladwijzer",),
        clip=("Uw knipsel",),
        page=("pagina",),
        location=("locatie",),
        date_formats=("%A %d %B %Y %H:%M:%S",),
    ),
    Language.RU: LanguagePatterns(
        added_on=("Добавлено",),
        highlight=("Ваше выделение", "Выделение"),
        note=("Ваша заметка", "Заметка"),
        bookmark=("Ваша закладка", "Закладка"),
        clip=("Ваша вырезка",),
        page=("страница", "странице", "стр."),
        location=("позиция", "местоположение"),
        date_formats=("%A, %d %B %Y г. %H:%M:%S",),
    ),
}


def resolve_language(value: str | Language) -> Language:
    """Map a language code to the closed enum, raising ValueError if unknown."""

    if isinstance(value, Language):
        return value
    return Language(value.strip().lower())


def contains_keyword(text: str, keywords: tuple[str, ...]) -> bool:
    folded = text.casefold()
    return any(keyword.casefold() in folded for keyword in keywords)
