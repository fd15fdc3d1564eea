"""MySQL collation names and their handshake ids."""

from __future__ import annotations

DEFAULT_COLLATION = "utf8mb4_general_ci"
BINARY_COLLATION = "binary"

_LANGUAGES = (
    "unicode icelandic latvian romanian slovenian polish estonian spanish "
    "swedish turkish czech danish lithuanian slovak spanish2 roman persian "
    "esperanto hungarian sinhala german2 croatian unicode_520 vietnamese"
).split()


def _language_collations(charset: str) -> str:
    return " ".join(f"{charset}_{lang}_ci" for lang in _LANGUAGES)


# Runs of consecutive ids: (first id, names in id order).  Only ids below
# 256 fit in the one-byte handshake field; ucs2, utf16 and utf32 collations
# cannot be used as connection charsets and are left out.
_RUNS: tuple[tuple[int, str], ...] = (
    (
        1,
        "big5_chinese_ci latin2_czech_cs dec8_swedish_ci cp850_general_ci "
        "latin1_german1_ci hp8_english_ci koi8r_general_ci latin1_swedish_ci "
        "latin2_general_ci swe7_swedish_ci ascii_general_ci ujis_japanese_ci "
        "sjis_japanese_ci cp1251_bulgarian_ci latin1_danish_ci hebrew_general_ci",
    ),
    (
        18,
        "tis620_thai_ci euckr_korean_ci latin7_estonian_cs latin2_hungarian_ci "
        "koi8u_general_ci cp1251_ukrainian_ci gb2312_chinese_ci greek_general_ci "
        "cp1250_general_ci latin2_croatian_ci gbk_chinese_ci cp1257_lithuanian_ci "
        "latin5_turkish_ci latin1_german2_ci armscii8_general_ci utf8_general_ci "
        "cp1250_czech_cs",
    ),
    (
        36,
        "cp866_general_ci keybcs2_general_ci macce_general_ci macroman_general_ci "
        "cp852_general_ci latin7_general_ci latin7_general_cs macce_bin "
        "cp1250_croatian_ci utf8mb4_general_ci utf8mb4_bin latin1_bin "
        "latin1_general_ci latin1_general_cs cp1251_bin cp1251_general_ci "
        "cp1251_general_cs macroman_bin",
    ),
    (57, "cp1256_general_ci cp1257_bin cp1257_general_ci"),
    (
        63,
        "binary armscii8_bin ascii_bin cp1250_bin cp1256_bin cp866_bin dec8_bin "
        "greek_bin hebrew_bin hp8_bin keybcs2_bin koi8r_bin koi8u_bin "
        "utf8_tolower_ci latin2_bin latin5_bin latin7_bin cp850_bin cp852_bin "
        "swe7_bin utf8_bin big5_bin euckr_bin gb2312_bin gbk_bin sjis_bin "
        "tis620_bin",
    ),
    (
        91,
        "ujis_bin geostd8_general_ci geostd8_bin latin1_spanish_ci "
        "cp932_japanese_ci cp932_bin eucjpms_japanese_ci eucjpms_bin "
        "cp1250_polish_ci",
    ),
    (192, _language_collations("utf8")),
    (223, "utf8_general_mysql500_ci"),
    (224, _language_collations("utf8mb4")),
    (248, "gb18030_chinese_ci gb18030_bin gb18030_unicode_520_ci"),
    (255, "utf8mb4_0900_ai_ci"),
)

COLLATIONS: dict[str, int] = {
    name: first + offset
    for first, names in _RUNS
    for offset, name in enumerate(names.split())
}

# Multibyte encodings whose trailing bytes may contain 0x5c, which makes
# client-side parameter interpolation unsafe.
UNSAFE_COLLATIONS: frozenset[str] = frozenset(
    "big5_chinese_ci big5_bin sjis_japanese_ci sjis_bin gbk_chinese_ci gbk_bin "
    "gb2312_bin cp932_japanese_ci cp932_bin gb18030_chinese_ci gb18030_bin "
    "gb18030_unicode_520_ci".split()
)


def collation_id(name: str) -> int:
    """Return the handshake id of collation ``name``.

    Raises KeyError for a collation that cannot be used on a connection.
    """
    try:
        return COLLATIONS[name]
    except KeyError:
        raise KeyError(f"unknown collation {name!r}") from None


def is_unsafe_collation(name: str) -> bool:
    """Tell whether interpolating parameters under ``name`` is unsafe."""
    return name in UNSAFE_COLLATIONS