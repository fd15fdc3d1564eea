import pytest

from mysqlreplay.collations import (
    BINARY_COLLATION,
    COLLATIONS,
    DEFAULT_COLLATION,
    UNSAFE_COLLATIONS,
    collation_id,
    is_unsafe_collation,
)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("utf8mb4_general_ci", 45),
        ("binary", 63),
        ("utf8mb4_0900_ai_ci", 255),
        ("big5_chinese_ci", 1),
        ("hebrew_general_ci", 16),
        ("tis620_thai_ci", 18),
        ("cp1250_czech_cs", 34),
        ("macroman_bin", 53),
        ("cp1257_general_ci", 59),
        ("tis620_bin", 89),
        ("cp1250_polish_ci", 99),
        ("utf8_unicode_ci", 192),
        ("utf8_vietnamese_ci", 215),
        ("utf8_general_mysql500_ci", 223),
        ("utf8mb4_unicode_ci", 224),
        ("utf8mb4_german2_ci", 244),
        ("utf8mb4_vietnamese_ci", 247),
        ("gb18030_unicode_520_ci", 250),
    ],
)
def test_known_ids(name, expected):
    assert collation_id(name) == expected


def test_default_and_binary_are_known():
    assert collation_id(DEFAULT_COLLATION) == COLLATIONS[DEFAULT_COLLATION]
    assert collation_id(BINARY_COLLATION) == COLLATIONS["binary"]


@pytest.mark.parametrize("name", ["ucs2_general_ci", "utf16_bin", "no_such_ci"])
def test_unusable_collations_raise(name):
    with pytest.raises(KeyError):
        collation_id(name)


def test_ids_fit_in_one_byte_and_are_unique():
    ids = list(COLLATIONS.values())
    assert all(1 <= i <= 255 for i in ids)
    assert len(set(ids)) == len(ids)


def test_unsafe_collations_are_all_known():
    for name in UNSAFE_COLLATIONS:
        assert 1 <= collation_id(name) <= 255
        assert is_unsafe_collation(name) is True


@pytest.mark.parametrize("name", ["gbk_chinese_ci", "sjis_bin", "gb18030_unicode_520_ci"])
def test_unsafe(name):
    assert is_unsafe_collation(name) is True


@pytest.mark.parametrize("name", ["utf8mb4_general_ci", "binary", "no_such_ci"])
def test_safe(name):
    assert is_unsafe_collation(name) is False