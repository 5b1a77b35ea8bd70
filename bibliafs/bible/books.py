"""
Bundled catalogue of the 66 books of the Protestant canon.

Entries follow the shape ABíbliaDigital returns from ``/books`` so the
catalogue can stand in for the upstream list when it is unavailable.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

# (abbrev pt, abbrev en, name, chapters, testament, group)
_BOOKS: Tuple[Tuple[str, str, str, int, str, str], ...] = (
    ("gn", "gn", "Gênesis", 50, "VT", "Pentateuco"),
    ("ex", "ex", "Êxodo", 40, "VT", "Pentateuco"),
    ("lv", "lv", "Levítico", 27, "VT", "Pentateuco"),
    ("nm", "nm", "Números", 36, "VT", "Pentateuco"),
    ("dt", "dt", "Deuteronômio", 34, "VT", "Pentateuco"),
    ("js", "js", "Josué", 24, "VT", "Históricos"),
    ("jz", "jud", "Juízes", 21, "VT", "Históricos"),
    ("rt", "rt", "Rute", 4, "VT", "Históricos"),
    ("1sm", "1sm", "1 Samuel", 31, "VT", "Históricos"),
    ("2sm", "2sm", "2 Samuel", 24, "VT", "Históricos"),
    ("1rs", "1kgs", "1 Reis", 22, "VT", "Históricos"),
    ("2rs", "2kgs", "2 Reis", 25, "VT", "Históricos"),
    ("1cr", "1ch", "1 Crônicas", 29, "VT", "Históricos"),
    ("2cr", "2ch", "2 Crônicas", 36, "VT", "Históricos"),
    ("ed", "ezr", "Esdras", 10, "VT", "Históricos"),
    ("ne", "ne", "Neemias", 13, "VT", "Históricos"),
    ("et", "et", "Ester", 10, "VT", "Históricos"),
    ("job", "job", "Jó", 42, "VT", "Poéticos"),
    ("sl", "ps", "Salmos", 150, "VT", "Poéticos"),
    ("pv", "prv", "Provérbios", 31, "VT", "Poéticos"),
    ("ec", "ec", "Eclesiastes", 12, "VT", "Poéticos"),
    ("ct", "so", "Cânticos", 8, "VT", "Poéticos"),
    ("is", "is", "Isaías", 66, "VT", "Profetas maiores"),
    ("jr", "jr", "Jeremias", 52, "VT", "Profetas maiores"),
    ("lm", "lm", "Lamentações", 5, "VT", "Profetas maiores"),
    ("ez", "ez", "Ezequiel", 48, "VT", "Profetas maiores"),
    ("dn", "dn", "Daniel", 12, "VT", "Profetas maiores"),
    ("os", "ho", "Oséias", 14, "VT", "Profetas menores"),
    ("jl", "jl", "Joel", 3, "VT", "Profetas menores"),
    ("am", "am", "Amós", 9, "VT", "Profetas menores"),
    ("ob", "ob", "Obadias", 1, "VT", "Profetas menores"),
    ("jn", "jn", "Jonas", 4, "VT", "Profetas menores"),
    ("mq", "mi", "Miquéias", 7, "VT", "Profetas menores"),
    ("na", "na", "Naum", 3, "VT", "Profetas menores"),
    ("hc", "hk", "Habacuque", 3, "VT", "Profetas menores"),
    ("sf", "zp", "Sofonias", 3, "VT", "Profetas menores"),
    ("ag", "hg", "Ageu", 2, "VT", "Profetas menores"),
    ("zc", "zc", "Zacarias", 14, "VT", "Profetas menores"),
    ("ml", "ml", "Malaquias", 4, "VT", "Profetas menores"),
    ("mt", "mt", "Mateus", 28, "NT", "Evangelhos"),
    ("mc", "mk", "Marcos", 16, "NT", "Evangelhos"),
    ("lc", "lk", "Lucas", 24, "NT", "Evangelhos"),
    ("jo", "jo", "João", 21, "NT", "Evangelhos"),
    ("at", "act", "Atos", 28, "NT", "Históricos"),
    ("rm", "rm", "Romanos", 16, "NT", "Cartas paulinas"),
    ("1co", "1co", "1 Coríntios", 16, "NT", "Cartas paulinas"),
    ("2co", "2co", "2 Coríntios", 13, "NT", "Cartas paulinas"),
    ("gl", "gl", "Gálatas", 6, "NT", "Cartas paulinas"),
    ("ef", "eph", "Efésios", 6, "NT", "Cartas paulinas"),
    ("fp", "ph", "Filipenses", 4, "NT", "Cartas paulinas"),
    ("cl", "cl", "Colossenses", 4, "NT", "Cartas paulinas"),
    ("1ts", "1ts", "1 Tessalonicenses", 5, "NT", "Cartas paulinas"),
    ("2ts", "2ts", "2 Tessalonicenses", 3, "NT", "Cartas paulinas"),
    ("1tm", "1tm", "1 Timóteo", 6, "NT", "Cartas paulinas"),
    ("2tm", "2tm", "2 Timóteo", 4, "NT", "Cartas paulinas"),
    ("tt", "tt", "Tito", 3, "NT", "Cartas paulinas"),
    ("fm", "phm", "Filemom", 1, "NT", "Cartas paulinas"),
    ("hb", "hb", "Hebreus", 13, "NT", "Cartas gerais"),
    ("tg", "jm", "Tiago", 5, "NT", "Cartas gerais"),
    ("1pe", "1pe", "1 Pedro", 5, "NT", "Cartas gerais"),
    ("2pe", "2pe", "2 Pedro", 3, "NT", "Cartas gerais"),
    ("1jo", "1jo", "1 João", 5, "NT", "Cartas gerais"),
    ("2jo", "2jo", "2 João", 1, "NT", "Cartas gerais"),
    ("3jo", "3jo", "3 João", 1, "NT", "Cartas gerais"),
    ("jd", "jd", "Judas", 1, "NT", "Cartas gerais"),
    ("ap", "re", "Apocalipse", 22, "NT", "Profético"),
)

BIBLE_BOOKS: List[Dict[str, Any]] = [
    {
        "abbrev": {"pt": pt, "en": en},
        "name": name,
        "chapters": chapters,
        "testament": testament,
        "group": group,
    }
    for pt, en, name, chapters, testament, group in _BOOKS
]

BOOK_NAMES: Dict[str, str] = {book["abbrev"]["pt"]: book["name"] for book in BIBLE_BOOKS}


def find_book(key: str) -> Optional[Dict[str, Any]]:
    """Look up a book by Portuguese abbreviation or full name, case-insensitively."""
    needle = key.strip().lower()
    for book in BIBLE_BOOKS:
        if book["abbrev"]["pt"] == needle or book["name"].lower() == needle:
            return book
    return None


def book_name(abbrev: str) -> str:
    """Display name for an abbreviation, or the abbreviation uppercased when unknown."""
    return BOOK_NAMES.get(abbrev.lower(), abbrev.upper())
