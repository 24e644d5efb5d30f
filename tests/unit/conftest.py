"""Общие fixtures: эталонный альманах из восьми категорий."""

import pytest

from almanac.engine import ConversionEngine
from almanac.producer import AlmanacDocument, parse_almanac


EXAMPLE_ALMANAC = """\
seeds: 79 14 55 13

seed-to-soil map:
50 98 2
52 50 48

soil-to-fertilizer map:
0 15 37
37 52 2
39 0 15

fertilizer-to-water map:
49 53 8
0 11 42
42 0 7
57 7 4

water-to-light map:
88 18 7
18 25 70

light-to-temperature map:
45 77 23
81 45 19
68 64 13

temperature-to-humidity map:
0 69 1
1 0 69

humidity-to-location map:
60 56 37
56 93 4
"""

# seed → location для EXAMPLE_ALMANAC
EXAMPLE_LOCATIONS = {79: 82, 14: 43, 55: 86, 13: 35}


@pytest.fixture
def example_text() -> str:
    return EXAMPLE_ALMANAC


@pytest.fixture
def example_document() -> AlmanacDocument:
    return parse_almanac(EXAMPLE_ALMANAC)


@pytest.fixture
def example_engine(example_document: AlmanacDocument) -> ConversionEngine:
    return ConversionEngine(example_document.tables)


@pytest.fixture
def example_locations() -> dict:
    return dict(EXAMPLE_LOCATIONS)
