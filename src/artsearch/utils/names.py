from __future__ import annotations

import html
import re


def format_name(name: str | None) -> str:
    """Turn a catalogue author key into a display name.

    - Decode HTML entities (e.g. &aacute; -> á)
    - Drop parenthesised qualifiers such as life dates or roles
    - Reorder "Surname, Given names" to "Given names Surname"
    - Capitalise words when the key is stored all lowercase
    - Normalize whitespace
    """

    if not name:
        return ""

    name = html.unescape(name)
    name = re.sub(r"\([^)]*\)", "", name)

    # Only the first comma separates surname from given names
    surname, sep, given = name.partition(",")
    if sep and given.strip():
        name = f"{given.strip()} {surname.strip()}"

    name = re.sub(r"\s+", " ", name).strip()

    if name == name.lower():
        name = " ".join(_capitalize(word) for word in name.split(" "))

    return name


def _capitalize(word: str) -> str:
    # Hyphenated surnames: "toulouse-lautrec" -> "Toulouse-Lautrec"
    return "-".join(part[:1].upper() + part[1:] for part in word.split("-"))
