from dialtone_digits import extract_digit_pairs


def test_spaced_number_groups_into_pairs():
    assert extract_digit_pairs("06 01 02 03 04") == ["06", "01", "02", "03", "04"]


def test_compact_number_matches_spaced_form():
    assert extract_digit_pairs("0601020304") == extract_digit_pairs("06 01 02 03 04")


def test_all_whitespace_kinds_are_removed():
    assert extract_digit_pairs(" 06\t01\n02  03 04 ") == ["06", "01", "02", "03", "04"]


def test_odd_leftover_is_dropped_not_padded():
    assert extract_digit_pairs("12345") == ["12", "34"]
    assert extract_digit_pairs("7") == []


def test_empty_input_gives_empty_list():
    assert extract_digit_pairs("") == []
    assert extract_digit_pairs("   ") == []


def test_non_digits_pass_through_untouched():
    assert extract_digit_pairs("(555)123-4567") == ["(5", "55", ")1", "23", "-4", "56"]
