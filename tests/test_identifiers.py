import itertools

import pytest

from vcdtrace.identifiers import MAX_LENGTH, IdentifierGenerator


def key_at(number):
    generator = IdentifierGenerator()
    for _ in range(number):
        generator.next()
    return generator.next()


@pytest.mark.parametrize(
    "number, expected",
    [
        (0, "!"),
        (8, ")"),
        (89, "z"),
        (90, "!!"),
        (91, '!"'),
        (179, "!z"),
        (180, '"!'),
    ],
)
def test_identifier_sequence(number, expected):
    assert key_at(number) == expected


def test_iteration_matches_next():
    generated = list(itertools.islice(IdentifierGenerator(), 92))
    assert generated[0] == "!"
    assert generated[89] == "z"
    assert generated[90] == "!!"
    assert generated[91] == '!"'


def test_identifiers_are_unique_and_printable():
    generated = list(itertools.islice(IdentifierGenerator(), 9000))
    assert len(set(generated)) == len(generated)
    assert all(all("!" <= ch <= "z" for ch in ident) for ident in generated)


def test_third_column_added_after_two_columns_exhausted():
    generated = list(itertools.islice(IdentifierGenerator(), 90 + 90 * 90 + 1))
    assert generated[-2] == "zz"
    assert generated[-1] == "!!!"


def test_generator_saturates_at_max_length():
    generator = IdentifierGenerator()
    generator._digits = [89] * (MAX_LENGTH - 1)
    first = generator.next()
    assert first == "!" * MAX_LENGTH
    assert generator.next() == first