import csv
from pathlib import Path
from typing import List, Sequence, Tuple

from biblemind.store import BibleStore

BOOK_COLUMNS = [
    "book_id", "book_name", "hebrew_name", "hebrew_transliteration", "hebrew_meaning",
    "greek_name", "greek_transliteration", "greek_meaning", "chapter_count", "verse_count",
    "short_name", "usx_code",
]

VERSE_COLUMNS = [
    "id", "book_id", "book_name", "chapter", "verse",
    "king_james_bible_kjv", "world_english_bible_web", "leningrad_codex",
    "jewish_publication_society_jps", "codex_alexandrinus", "brenton",
    "samaritan_pentateuch", "samaritan_pentateuch_english", "onkelos_aramaic", "onkelos_english",
]

BOOK_ROWS = [
    ["1", "Genesis", "בְּרֵאשִׁית", "Bereshit", "In the beginning", "Γένεσις", "Genesis", "Origin", "50", "1533", "Gen", "GEN"],
    ["2", "Exodus", "שְׁמוֹת", "Shemot", "Names", "Ἔξοδος", "Exodos", "Going out", "40", "1213", "Exo", "EXO"],
    ["39", "Malachi", "מַלְאָכִי", "Malachi", "My messenger", "", "", "", "4", "55", "Mal", "MAL"],
    ["40", "Matthew", "", "", "", "Ματθαῖον", "Matthaion", "Gift of God", "28", "1071", "Matt", "MAT"],
    ["41", "Mark", "", "", "", "Μᾶρκον", "Markon", "", "", "n/a", "Mark", "MRK"],
    ["66", "Revelation", "", "", "", "Ἀποκάλυψις", "Apokalypsis", "Unveiling", "22", "404", "Rev", "REV"],
]

def _verse(id_, book_id, book, ch, v, kjv, web, hebrew="", samaritan_en=""):
    return [str(id_), str(book_id), book, str(ch), str(v), kjv, web, hebrew, "", "", "", "", samaritan_en, "", ""]

VERSE_ROWS = [
    _verse(1, 1, "Genesis", 1, 1,
           "In the beginning God created the heaven and the earth.",
           "In the beginning, God created the heavens and the earth.",
           hebrew="בְּרֵאשִׁית בָּרָא אֱלֹהִים אֵת הַשָּׁמַיִם וְאֵת הָאָרֶץ",
           samaritan_en="In the beginning created God the heavens and the earth."),
    _verse(2, 1, "Genesis", 1, 2,
           "And the earth was without form, and void; and darkness was upon the face of the deep.",
           "The earth was formless and empty. Darkness was on the surface of the deep."),
    _verse(3, 1, "Genesis", 1, 3,
           "And God said, Let there be light: and there was light.",
           "God said, “Let there be light,” and there was light."),
    _verse(4, 1, "Genesis", 2, 1,
           "Thus the heavens and the earth were finished, and all the host of them.",
           "The heavens, the earth, and all their vast array were finished."),
    _verse(5, 2, "Exodus", 1, 1,
           "Now these are the names of the children of Israel, which came into Egypt.",
           "Now these are the names of the sons of Israel, who came into Egypt."),
    _verse(6, 40, "Matthew", 1, 1,
           "The book of the generation of Jesus Christ, the son of David.",
           "The book of the genealogy of Jesus Christ, the son of David."),
]

STRONGS_TEXT = (
    "number,word,gloss,language,part_of_speech,gender,occurrences,first_occurrence,root\n"
    '430,אֱלֹהִים,"1. (plural)\n'
    "  a. rulers, judges\n"
    'KJV: God, god, judge",H,n,m,2606,Gen 1:1,אֱלוֹהַּ\n'
    '1254,בָּרָא,"1. to create, shape, form\n'
    'KJV: choose, create",H,v,,54,Gen 1:1,\n'
    '7225,רֵאשִׁית,"first, beginning, ""best""",H,n,f,51,Gen 1:1,ראש\n'
    "bad,row\n"
    ",missing,key,H,n,m,1,x,y\n"
)

def write_csv(path: Path, header: Sequence[str], rows: Sequence[Sequence[str]]) -> Path:
    with path.open("w", encoding="utf-8", newline="") as f:
        w = csv.writer(f)
        w.writerow(header)
        w.writerows(rows)
    return path

def write_dataset(
    root: Path,
    books: Sequence[Sequence[str]] = BOOK_ROWS,
    verses: Sequence[Sequence[str]] = VERSE_ROWS,
    strongs: str = STRONGS_TEXT,
) -> Tuple[Path, Path, Path]:
    books_path = write_csv(root / "BibleData-Book.csv", BOOK_COLUMNS, books)
    verses_path = write_csv(root / "AlamoPolyglot.csv", VERSE_COLUMNS, verses)
    strongs_path = root / "HebrewStrongs.csv"
    strongs_path.write_text(strongs, encoding="utf-8")
    return books_path, verses_path, strongs_path

def loaded_store(root: Path, **kwargs) -> BibleStore:
    store = BibleStore(*write_dataset(root, **kwargs))
    store.load_sync()
    return store

def verse_rows_with(extra: List[List[str]]) -> List[List[str]]:
    return [list(r) for r in VERSE_ROWS] + extra
