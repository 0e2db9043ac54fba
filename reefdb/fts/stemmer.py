"""English (Porter2) stemming algorithm."""

from __future__ import annotations

from collections.abc import Iterable

_VOWELS = frozenset("aeiouy")
_DOUBLES = ("bb", "dd", "ff", "gg", "mm", "nn", "pp", "rr", "tt")
_LI_ENDINGS = frozenset("cdeghkmnrt")
_REGION_PREFIXES = ("gener", "commun", "arsen")

_EXCEPTIONS = {
    "skis": "ski",
    "skies": "sky",
    "dying": "die",
    "lying": "lie",
    "tying": "tie",
    "idly": "idl",
    "gently": "gentl",
    "ugly": "ugli",
    "early": "earli",
    "only": "onli",
    "singly": "singl",
    "sky": "sky",
    "news": "news",
    "howe": "howe",
    "atlas": "atlas",
    "cosmos": "cosmos",
    "bias": "bias",
    "andes": "andes",
}

_AFTER_STEP_1A = frozenset(
    {"inning", "outing", "canning", "herring", "earring", "proceed", "exceed", "succeed"}
)

_STEP1B = ("eedly", "ingly", "edly", "eed", "ing", "ed")

_STEP2 = {
    "ization": "ize",
    "ational": "ate",
    "fulness": "ful",
    "ousness": "ous",
    "iveness": "ive",
    "tional": "tion",
    "biliti": "ble",
    "lessli": "less",
    "entli": "ent",
    "ation": "ate",
    "alism": "al",
    "aliti": "al",
    "ousli": "ous",
    "iviti": "ive",
    "fulli": "ful",
    "enci": "ence",
    "anci": "ance",
    "abli": "able",
    "izer": "ize",
    "ator": "ate",
    "alli": "al",
    "bli": "ble",
    "ogi": "og",
    "li": "",
}

_STEP3 = {
    "ational": "ate",
    "tional": "tion",
    "alize": "al",
    "icate": "ic",
    "iciti": "ic",
    "ative": "",
    "ical": "ic",
    "ness": "",
    "ful": "",
}

_STEP4 = (
    "ement", "ance", "ence", "able", "ible", "ment", "ant", "ent", "ism",
    "ate", "iti", "ous", "ive", "ize", "ion", "al", "er", "ic",
)


def _longest_suffix(word: str, suffixes: Iterable[str]) -> str | None:
    return max((s for s in suffixes if word.endswith(s)), key=len, default=None)


def _region_start(word: str, start: int) -> int:
    for i in range(start + 1, len(word)):
        if word[i] not in _VOWELS and word[i - 1] in _VOWELS:
            return i + 1
    return len(word)


def _regions(word: str) -> tuple[int, int]:
    r1 = next(
        (len(p) for p in _REGION_PREFIXES if word.startswith(p)),
        None,
    )
    if r1 is None:
        r1 = _region_start(word, 0)
    return r1, _region_start(word, r1)


def _ends_short_syllable(word: str) -> bool:
    if len(word) >= 3:
        return (
            word[-3] not in _VOWELS
            and word[-2] in _VOWELS
            and word[-1] not in _VOWELS
            and word[-1] not in "wxY"
        )
    return len(word) == 2 and word[0] in _VOWELS and word[1] not in _VOWELS


def _is_short(word: str, r1: int) -> bool:
    return r1 >= len(word) and _ends_short_syllable(word)


def _mark_y(word: str) -> str:
    out: list[str] = []
    for ch in word:
        if ch == "y" and (not out or out[-1] in _VOWELS):
            ch = "Y"
        out.append(ch)
    return "".join(out)


def _step0(word: str) -> str:
    suffix = _longest_suffix(word, ("'s'", "'s", "'"))
    return word[: -len(suffix)] if suffix else word


def _step1a(word: str) -> str:
    if word.endswith("sses"):
        return word[:-2]
    if word.endswith(("ied", "ies")):
        stem = word[:-3]
        return stem + ("i" if len(stem) > 1 else "ie")
    if word.endswith(("us", "ss")):
        return word
    if word.endswith("s"):
        stem = word[:-1]
        if any(ch in _VOWELS for ch in stem[:-1]):
            return stem
    return word


def _step1b(word: str, r1: int) -> str:
    suffix = _longest_suffix(word, _STEP1B)
    if suffix is None:
        return word
    stem = word[: -len(suffix)]
    if suffix in ("eed", "eedly"):
        return stem + "ee" if len(stem) >= r1 else word
    if not any(ch in _VOWELS for ch in stem):
        return word
    if stem.endswith(("at", "bl", "iz")):
        return stem + "e"
    if stem.endswith(_DOUBLES):
        return stem[:-1]
    if _is_short(stem, r1):
        return stem + "e"
    return stem


def _step1c(word: str) -> str:
    if len(word) > 2 and word[-1] in "yY" and word[-2] not in _VOWELS:
        return word[:-1] + "i"
    return word


def _step2(word: str, r1: int) -> str:
    suffix = _longest_suffix(word, _STEP2)
    if suffix is None:
        return word
    stem = word[: -len(suffix)]
    if len(stem) < r1:
        return word
    if suffix == "ogi" and not stem.endswith("l"):
        return word
    if suffix == "li" and (not stem or stem[-1] not in _LI_ENDINGS):
        return word
    return stem + _STEP2[suffix]


def _step3(word: str, r1: int, r2: int) -> str:
    suffix = _longest_suffix(word, _STEP3)
    if suffix is None:
        return word
    stem = word[: -len(suffix)]
    if len(stem) < r1 or (suffix == "ative" and len(stem) < r2):
        return word
    return stem + _STEP3[suffix]


def _step4(word: str, r2: int) -> str:
    suffix = _longest_suffix(word, _STEP4)
    if suffix is None:
        return word
    stem = word[: -len(suffix)]
    if len(stem) < r2:
        return word
    if suffix == "ion" and not stem.endswith(("s", "t")):
        return word
    return stem


def _step5(word: str, r1: int, r2: int) -> str:
    stem = word[:-1]
    if word.endswith("e"):
        if len(stem) >= r2 or (len(stem) >= r1 and not _ends_short_syllable(stem)):
            return stem
    elif word.endswith("l") and len(stem) >= r2 and stem.endswith("l"):
        return stem
    return word


def stem(word: str) -> str:
    """Return the English stem of a lower-case word."""
    if word in _EXCEPTIONS:
        return _EXCEPTIONS[word]
    if len(word) < 3:
        return word
    if word.startswith("'"):
        word = word[1:]
    word = _mark_y(word)
    r1, r2 = _regions(word)
    word = _step1a(_step0(word))
    if word in _AFTER_STEP_1A:
        return word
    word = _step1c(_step1b(word, r1))
    word = _step2(word, r1)
    word = _step3(word, r1, r2)
    word = _step4(word, r2)
    word = _step5(word, r1, r2)
    return word.replace("Y", "y")