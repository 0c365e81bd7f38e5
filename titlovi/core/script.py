"""Serbian Latin ↔ Cyrillic transliteration and script detection.

WHY: Recognition output for Serbian comes back in Latin script (Gaj's
alphabet), while the subtitles are delivered in Cyrillic (Vuk's alphabet).
The two alphabets map one-to-one, except that three Cyrillic letters
(Љ, Њ, Џ) are written in Latin as two characters (Lj, Nj, Dž). A naive
character-by-character replacement turns "Njegova" into "Нјегова".

HOW: latin_to_cyrillic() scans left to right and checks the digraph table
before the single-letter table at every position, so "Nj" wins over "N".
cyrillic_to_latin() is a single-character table, except that Љ/Њ/Џ pick
the all-caps form ("LJ") when a neighbouring letter is upper case and the
title form ("Lj") otherwise. detect_script() compares counts of Cyrillic
code points and Latin letters.

RULES:
- Characters missing from the tables (digits, punctuation, other
  alphabets) pass through unchanged in both directions.
- Input is NFC-normalised first so decomposed "č" (c + caron) is mapped.
- Case is preserved per variant: "NJ" → "Њ", "Nj" → "Њ", "nj" → "њ".
- Ties in detection go to Latin; Cyrillic must strictly outnumber.
- ensure_cyrillic() is idempotent: Cyrillic input is returned as is.
- The ASCII stand-ins "Dj"/"Dz" are opt-in (ascii_digraphs=True) because
  they break real words such as "odjednom" and "nadzor".
- cyrillic_to_latin(latin_to_cyrillic(s)) == s holds when ascii_digraphs
  is off, s contains none of the ligature code points (Ǆ ǅ ǆ Ǉ ǈ ǉ Ǌ ǋ ǌ,
  mapped one way only), and every Lj/Nj/Dž in s is cased the way its
  neighbours decide: all-caps when the next letter (or, at the end of a
  word, the previous letter) is upper case, title or lower case otherwise.
  "LJUBAV" and "Ljubav" round-trip; a bare "LJ" comes back as "Lj".
"""

from __future__ import annotations

import unicodedata
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Tuple

# =============================================================================
# Tables
# =============================================================================

# Checked first, two characters at a time.
LATIN_DIGRAPHS: Mapping[str, str] = MappingProxyType({
    "LJ": "Љ", "Lj": "Љ", "lj": "љ",
    "NJ": "Њ", "Nj": "Њ", "nj": "њ",
    "DŽ": "Џ", "Dž": "Џ", "dž": "џ",
})

# Keyboard stand-ins for Đ and Dž, used when ascii_digraphs=True.
ASCII_DIGRAPHS: Mapping[str, str] = MappingProxyType({
    "DJ": "Ђ", "Dj": "Ђ", "dj": "ђ",
    "DZ": "Џ", "Dz": "Џ", "dz": "џ",
})

LATIN_LETTERS: Mapping[str, str] = MappingProxyType({
    "A": "А", "B": "Б", "V": "В", "G": "Г", "D": "Д", "Đ": "Ђ",
    "E": "Е", "Ž": "Ж", "Z": "З", "I": "И", "J": "Ј", "K": "К",
    "L": "Л", "M": "М", "N": "Н", "O": "О", "P": "П", "R": "Р",
    "S": "С", "T": "Т", "Ć": "Ћ", "U": "У", "F": "Ф", "H": "Х",
    "C": "Ц", "Č": "Ч", "Š": "Ш",
    "a": "а", "b": "б", "v": "в", "g": "г", "d": "д", "đ": "ђ",
    "e": "е", "ž": "ж", "z": "з", "i": "и", "j": "ј", "k": "к",
    "l": "л", "m": "м", "n": "н", "o": "о", "p": "п", "r": "р",
    "s": "с", "t": "т", "ć": "ћ", "u": "у", "f": "ф", "h": "х",
    "c": "ц", "č": "ч", "š": "ш",
    # Unicode ligature code points for the digraphs (one-way).
    "Ǉ": "Љ", "ǈ": "Љ", "ǉ": "љ",
    "Ǌ": "Њ", "ǋ": "Њ", "ǌ": "њ",
    "Ǆ": "Џ", "ǅ": "Џ", "ǆ": "џ",
})

CYRILLIC_LETTERS: Mapping[str, str] = MappingProxyType({
    cyr: lat
    for lat, cyr in LATIN_LETTERS.items()
    if lat.isascii() or lat in "ĐđŽžĆćČčŠš"
})

# Cyrillic letters whose Latin form is two characters: (title, all-caps).
CYRILLIC_DIGRAPHS: Mapping[str, Tuple[str, str]] = MappingProxyType({
    "Љ": ("Lj", "LJ"), "љ": ("lj", "lj"),
    "Њ": ("Nj", "NJ"), "њ": ("nj", "nj"),
    "Џ": ("Dž", "DŽ"), "џ": ("dž", "dž"),
})

_LATIN_SCRIPT_LETTERS = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZčćžšđČĆŽŠĐ"
)


class Script(str, Enum):
    """The two scripts Serbian is written in."""

    latin = "latin"
    cyrillic = "cyrillic"


def _is_cyrillic_char(ch: str) -> bool:
    return "\u0400" <= ch <= "\u04ff"


# =============================================================================
# Conversion
# =============================================================================

def latin_to_cyrillic(text: str, ascii_digraphs: bool = False) -> str:
    """Convert Serbian Latin text to Cyrillic.

    Args:
        text: Latin (or mixed) text.
        ascii_digraphs: Also map "Dj" → "Ђ" and "Dz" → "Џ".

    Returns:
        The converted text; unmapped characters are kept as they are.
    """
    if not text:
        return ""

    text = unicodedata.normalize("NFC", text)
    out = []
    i = 0
    n = len(text)
    while i < n:
        if i + 1 < n:
            pair = text[i:i + 2]
            mapped = LATIN_DIGRAPHS.get(pair)
            if mapped is None and ascii_digraphs:
                mapped = ASCII_DIGRAPHS.get(pair)
            if mapped is not None:
                out.append(mapped)
                i += 2
                continue
        ch = text[i]
        out.append(LATIN_LETTERS.get(ch, ch))
        i += 1
    return "".join(out)


def _digraph_upper(text: str, i: int) -> bool:
    """Decide whether the Latin digraph for text[i] is written all-caps."""
    if i + 1 < len(text) and text[i + 1].isalpha():
        return text[i + 1].isupper()
    if i > 0 and text[i - 1].isalpha():
        return text[i - 1].isupper()
    return False


def cyrillic_to_latin(text: str) -> str:
    """Convert Serbian Cyrillic text to Latin.

    Љ, Њ and Џ become "LJ"/"NJ"/"DŽ" inside upper-case words and
    "Lj"/"Nj"/"Dž" otherwise, so that "ЉУБАВ" → "LJUBAV" and
    "Љубав" → "Ljubav".
    """
    if not text:
        return ""

    out = []
    for i, ch in enumerate(text):
        pair = CYRILLIC_DIGRAPHS.get(ch)
        if pair is not None:
            out.append(pair[1] if _digraph_upper(text, i) else pair[0])
        else:
            out.append(CYRILLIC_LETTERS.get(ch, ch))
    return "".join(out)


# =============================================================================
# Detection
# =============================================================================

def detect_script(text: str) -> Script:
    """Return the dominant script of text.

    Counts Cyrillic code points (U+0400–U+04FF) against Latin letters
    (ASCII plus č ć ž š đ). Cyrillic must strictly outnumber Latin;
    ties, including text with no letters at all, count as Latin.
    """
    cyrillic = 0
    latin = 0
    for ch in text or "":
        if _is_cyrillic_char(ch):
            cyrillic += 1
        elif ch in _LATIN_SCRIPT_LETTERS:
            latin += 1
    return Script.cyrillic if cyrillic > latin else Script.latin


def is_cyrillic(text: str) -> bool:
    return detect_script(text) is Script.cyrillic


def ensure_cyrillic(text: str, ascii_digraphs: bool = False) -> str:
    """Convert text to Cyrillic unless it already is Cyrillic."""
    if is_cyrillic(text):
        return text
    return latin_to_cyrillic(text, ascii_digraphs=ascii_digraphs)


def ensure_latin(text: str) -> str:
    """Convert text to Latin unless it already is Latin."""
    if not is_cyrillic(text):
        return text
    return cyrillic_to_latin(text)


# =============================================================================
# Mapper object
# =============================================================================

class ScriptMapper:
    """Direction-aware wrapper around the conversion functions.

    WHY: The pipeline converts cues to whichever script the caller asked
    for. Cyrillic is the usual target, but editors sometimes want Latin
    output from Cyrillic input. The mapper hides the direction.

    RULES:
    - source/target are always the two different scripts.
    - ensure_target_script() is idempotent for both directions.
    """

    def __init__(self, target: Script = Script.cyrillic, ascii_digraphs: bool = False) -> None:
        self.target = Script(target)
        self.source = Script.latin if self.target is Script.cyrillic else Script.cyrillic
        self.ascii_digraphs = ascii_digraphs

    def to_target_script(self, text: str) -> str:
        if self.target is Script.cyrillic:
            return latin_to_cyrillic(text, ascii_digraphs=self.ascii_digraphs)
        return cyrillic_to_latin(text)

    def to_source_script(self, text: str) -> str:
        if self.target is Script.cyrillic:
            return cyrillic_to_latin(text)
        return latin_to_cyrillic(text, ascii_digraphs=self.ascii_digraphs)

    def detect_script(self, text: str) -> Script:
        return detect_script(text)

    def ensure_target_script(self, text: str) -> str:
        if detect_script(text) is self.target:
            return text
        return self.to_target_script(text)
