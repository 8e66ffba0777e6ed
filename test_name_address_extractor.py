"""
Tests for the name and address heuristics.

Usage:
    pytest test_name_address_extractor.py
"""

from features.idcard.infrastructure.name_address_extractor import (
    extract_address,
    extract_full_name,
    mentions_governorate,
    score_name_candidate,
)


CARD_TEXT = "جمهورية مصر العربية\nبطاقة رقم قومي\n٢٩٠٠٥٠٩١٢٣٤٥٦٧\nأحمد محمد علي\nمحافظة القاهرة"


def test_name_from_card_text():
    assert extract_full_name(CARD_TEXT) == "أحمد محمد علي"


def test_boilerplate_is_never_a_name():
    assert extract_full_name("جمهورية مصر العربية") is None
    assert extract_full_name("بطاقة تحقيق الشخصية") is None


def test_lines_with_digits_or_governorates_are_rejected():
    assert extract_full_name("أحمد محمد 123") is None
    assert extract_full_name("أحمد محمد ١٢٣") is None
    assert extract_full_name("كفر الشيخ الجديدة") is None


def test_word_count_and_length_limits():
    assert extract_full_name("أحمد") is None
    assert extract_full_name("علي حسن") == "علي حسن"
    assert extract_full_name("أحمد محمد علي حسن محمود سيد إبراهيم خليل") is None  # 8 words
    assert extract_full_name("John Smith") is None


def test_punctuation_is_stripped():
    assert extract_full_name("أحمد. محمد، علي") == "أحمد محمد علي"


def test_three_or_four_words_beat_two():
    assert extract_full_name("محمد علي\nأحمد محمد علي حسن") == "أحمد محمد علي حسن"


def test_first_line_wins_ties():
    assert extract_full_name("أحمد محمد علي\nمحمود حسن إبراهيم") == "أحمد محمد علي"


def test_score_name_candidate():
    assert score_name_candidate(["أحمد", "محمد", "علي"]) == 5
    assert score_name_candidate(["محمد", "علي"]) == 2  # 2 words, 8 chars
    assert score_name_candidate(["أ", "ب", "ج"]) == 3  # too short for the length bonus
    assert score_name_candidate(["أحمد", "محمد", "علي", "حسن", "محمود", "سيد", "خليل"]) == 2


def test_address_from_card_text():
    address = extract_address(CARD_TEXT)
    assert address == "القاهرة"


def test_address_labels_and_colons_are_stripped():
    assert extract_address("العنوان: 15 شارع التحرير الجيزة") == "15 شارع التحرير الجيزة"
    assert extract_address("Address: الإسكندرية") == "الإسكندرية"


def test_address_ignores_name_exclusion_list():
    assert extract_address("شارع الجمهورية القاهرة") == "شارع الجمهورية القاهرة"


def test_first_address_line_wins():
    assert extract_address("محافظة الجيزة\nمحافظة القاهرة") == "الجيزة"


def test_address_length_limits():
    assert extract_address("قنا") is None
    assert extract_address("القاهرة " + "ا" * 120) is None


def test_no_address():
    assert extract_address("") is None
    assert extract_address("لا يوجد عنوان هنا") is None


def test_mentions_governorate_whole_words_only():
    assert mentions_governorate("مدينة نصر القاهرة")
    assert mentions_governorate("اسيوط")  # spelling without hamza
    assert not mentions_governorate("بالقاهرة")
    assert not mentions_governorate("")
