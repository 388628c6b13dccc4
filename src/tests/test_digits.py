from datetime_service.utils.digits import localize_digits, normalize, normalize_for_date


# --------------------------- DIGITS ---------------------------

def test_persian_digits_map_bijectively():
    persian = "۰۱۲۳۴۵۶۷۸۹"
    out = normalize(persian)
    assert out == "0123456789"
    assert len(set(out)) == 10
    for i, ch in enumerate(persian):
        assert normalize(ch) == str(i)


def test_arabic_indic_digits_map_bijectively():
    arabic = "٠١٢٣٤٥٦٧٨٩"
    assert normalize(arabic) == "0123456789"
    for i, ch in enumerate(arabic):
        assert normalize(ch) == str(i)


def test_mixed_digit_systems():
    assert normalize("۱۴٠۲/٠۵/۱۱") == "1402/05/11"


# --------------------------- SEPARATORS ---------------------------

def test_decimal_and_group_separators_become_dot():
    assert normalize("۱۴۰۲٫۵٫۱") == "1402.5.1"
    assert normalize("1402٬05٬11") == "1402.05.11"
    assert normalize("1402,05,11") == "1402.05.11"


def test_slash_variants():
    assert normalize("1402／05╱11") == "1402/05/11"
    assert normalize("1402∕05⁄11") == "1402/05/11"


def test_dash_variants():
    assert normalize("2025–03—01") == "2025-03-01"
    assert normalize("2025‐03−01") == "2025-03-01"


# --------------------------- WHITESPACE ---------------------------

def test_whitespace_collapses_and_trims():
    assert normalize("  1402/05/11 \t\n  10:30  ") == "1402/05/11 10:30"


def test_zwnj_and_nbsp_become_space():
    assert normalize("1402/05/11‌10:30") == "1402/05/11 10:30"
    assert normalize("1402/05/11  10:30") == "1402/05/11 10:30"


# --------------------------- PASS-THROUGH ---------------------------

def test_non_ascii_words_are_preserved():
    assert normalize("۱۴۰۲/۰۵/۱۱ ساعت ۱۰:۳۰") == "1402/05/11 ساعت 10:30"


def test_ascii_is_unchanged():
    text = "2025-03-01T12:30:00+03:00"
    assert normalize(text) == text


def test_empty_and_none_are_total():
    assert normalize("") == ""
    assert normalize(None) == ""
    assert normalize("   ") == ""
    assert normalize_for_date(None) == ""


# --------------------------- STRICT ---------------------------

def test_strict_variant_drops_words():
    assert normalize_for_date("۱۴۰۲/۰۵/۱۱ ساعت ۱۰:۳۰") == "1402/05/11  10:30"


def test_strict_variant_drops_latin_and_offsets():
    assert normalize_for_date("2025-03-01T12:30:00+03:00") == "2025-03-0112:30:0003:00"


# --------------------------- LOCALIZE ---------------------------

def test_localize_digits():
    assert localize_digits("1402/05/11", "fa-IR") == "۱۴۰۲/۰۵/۱۱"
    assert localize_digits("1445/01/01", "ar-SA") == "١٤٤٥/٠١/٠١"
    assert localize_digits("2025-03-01", "en-US") == "2025-03-01"
    assert localize_digits("2025-03-01", None) == "2025-03-01"
