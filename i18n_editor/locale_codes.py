"""Normalize locale file and directory names into canonical locale codes."""

import re

# ISO 639-1 language codes
ISO_639_1 = frozenset("""
aa ab ae af ak am an ar as av ay az ba be bg bh bi bm bn bo br bs ca ce ch co
cr cs cu cv cy da de dv dz ee el en eo es et eu fa ff fi fj fo fr fy ga gd gl
gn gu gv ha he hi ho hr ht hu hy hz ia id ie ig ii ik io is it iu ja jv ka kg
ki kj kk kl km kn ko kr ks ku kv kw ky la lb lg li ln lo lt lu lv mg mh mi mk
ml mn mr ms mt my na nb nd ne ng nl nn no nr nv ny oc oj om or os pa pi pl ps
pt qu rm rn ro ru rw sa sc sd se sg si sk sl sm sn so sq sr ss st su sv sw ta
te tg th ti tk tl tn to tr ts tt tw ty ug uk ur uz ve vi vo wa wo xh yi yo za
zh zu
""".split())

# Three-letter codes that show up as locale names without a two-letter form
ISO_639_3 = frozenset(["ast", "ckb", "fil", "haw", "yue", "cmn", "nan", "kab", "sco", "zgh"])

LOCALE_PATTERN = re.compile(
    r"^(?P<language>[a-z]{2,3})"
    r"(?:[-_](?P<script>[a-z]{4}))?"
    r"(?:[-_](?P<region>[a-z]{2}|[0-9]{3}))?$",
    re.IGNORECASE,
)


def normalize_locale(raw_name: str) -> str:
    """
    Normalize a locale name such as ``zh_cn`` or ``EN-us``.

    Args:
        raw_name: File name without extension, or directory name

    Returns:
        Canonical locale code (e.g. "zh-CN", "sr-Latn-RS"), or "" if the
        name is not a recognizable locale
    """
    if not raw_name:
        return ""

    match = LOCALE_PATTERN.match(raw_name.strip())
    if not match:
        return ""

    language = match.group("language").lower()
    if language not in ISO_639_1 and language not in ISO_639_3:
        return ""

    parts = [language]
    if match.group("script"):
        parts.append(match.group("script").title())
    if match.group("region"):
        parts.append(match.group("region").upper())

    return "-".join(parts)
