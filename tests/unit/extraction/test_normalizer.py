"""
Unit tests for normalization and span lookup.

Tests value normalization, deduplication, confidence clamping, defaults,
wiki URL filtering, span lookup and offset ordering.
"""

import math

import pytest

from tg_entities.extraction.entity import EntityType, dedupe_key
from tg_entities.extraction.normalizer import (
    DEFAULT_CONFIDENCE,
    DEFAULT_REASON,
    normalize_confidence,
    normalize_detections,
    normalize_display_name,
    normalize_value,
    normalize_wiki_url,
)
from tg_entities.extraction.span_locator import find_span
from tests.fixtures.clients import raw


class TestFindSpan:
    """Test find_span()."""

    def test_case_insensitive(self):
        assert find_span("Hello John world", "john") == (6, 10)

    def test_not_found(self):
        assert find_span("No matching text here", "Ghost Entity") == (None, None)

    def test_first_occurrence(self):
        assert find_span("Berlin, then berlin again", "BERLIN") == (0, 6)

    def test_cyrillic(self):
        assert find_span("Вчера в Москве", "москве") == (8, 14)


class TestNormalizeValue:
    """Test normalize_value()."""

    @pytest.mark.parametrize("value,expected", [
        ("John Doe", "john doe"),
        ("  John   DOE  ", "john doe"),
        ("John\n\tDoe", "john doe"),
        ("Пётр Петров", "пётр петров"),
    ])
    def test_normalization(self, value, expected):
        assert normalize_value(value) == expected


class TestDedupeKey:
    """Test dedupe_key() shared by the model and fallback paths."""

    def test_format(self):
        assert dedupe_key(EntityType.SPORTS_CLUB, "fc barcelona") == "sports_club:fc barcelona"

    def test_accepts_type_value(self):
        assert dedupe_key("location", "berlin") == dedupe_key(EntityType.LOCATION, "berlin")


class TestNormalizeConfidence:
    """Test normalize_confidence()."""

    @pytest.mark.parametrize("confidence", [None, math.nan, "0.9", True, [0.5]])
    def test_missing_or_invalid_defaults(self, confidence):
        assert normalize_confidence(confidence) == DEFAULT_CONFIDENCE == 0.75

    def test_negative_clamped_to_zero(self):
        assert normalize_confidence(-0.5) == 0

    def test_above_one_clamped_to_one(self):
        assert normalize_confidence(5.0) == 1

    def test_infinity_clamped(self):
        assert normalize_confidence(math.inf) == 1

    @pytest.mark.parametrize("confidence", [0, 0.3, 0.95, 1])
    def test_in_range_passes_through(self, confidence):
        assert normalize_confidence(confidence) == confidence


class TestNormalizeWikiUrl:
    """Test normalize_wiki_url()."""

    @pytest.mark.parametrize("url", [
        "https://en.wikipedia.org/wiki/Elon_Musk",
        "http://ru.wikipedia.org/wiki/Москва",
        "https://пример.рф/wiki/Статья",
        "https://en.wikipedia.org./wiki/Berlin",
        "http://192.168.0.1:8080/page",
    ])
    def test_http_urls_kept(self, url):
        assert normalize_wiki_url(url) == url

    def test_surrounding_whitespace_trimmed(self):
        assert normalize_wiki_url("  https://example.org/a  ") == "https://example.org/a"

    @pytest.mark.parametrize("url", [
        None,
        123,
        "",
        "   ",
        "not a url",
        "/wiki/Relative",
        "ftp://example.org/file",
        "javascript:alert(1)",
        "https://",
        "https://example.org:99999/",
        "http://exa mple.com/x",
        "https://exa_mple.org/",
        "https://-example.org/",
        "https://example-.org/",
        "https://example..org/",
        "https://exa%20mple.org/",
    ])
    def test_invalid_urls_dropped(self, url):
        assert normalize_wiki_url(url) is None


class TestNormalizeDisplayName:
    """Test normalize_display_name()."""

    def test_trimmed(self):
        assert normalize_display_name("  Elon Musk ", "Musk") == "Elon Musk"

    @pytest.mark.parametrize("display_name", [None, "", "   ", 42])
    def test_falls_back_to_value(self, display_name):
        assert normalize_display_name(display_name, "Musk") == "Musk"


class TestNormalizeDetections:
    """Test normalize_detections()."""

    def test_basic_mapping(self):
        detections = normalize_detections(
            "John Doe went to the store",
            [raw(
                "John Doe",
                confidence=0.95,
                reason="Name",
                description="A person",
                wiki_url=None,
            )],
        )

        assert len(detections) == 1
        detection = detections[0]
        assert detection.type is EntityType.PERSON
        assert detection.value == "John Doe"
        assert detection.display_name == "John Doe"
        assert detection.normalized_value == "john doe"
        assert detection.confidence == 0.95
        assert detection.start_offset == 0
        assert detection.end_offset == 8
        assert detection.reason == "Name"
        assert detection.description == "A person"
        assert detection.wiki_url is None

    def test_deduplicates_by_type_and_normalized_value(self):
        detections = normalize_detections(
            "John Doe is great",
            [raw("John Doe", confidence=0.9), raw("john  doe", confidence=0.8)],
        )

        assert len(detections) == 1
        assert detections[0].value == "John Doe"
        assert detections[0].confidence == 0.9

    def test_same_value_different_type_kept(self):
        detections = normalize_detections(
            "Barcelona won in Barcelona",
            [
                raw("Barcelona", EntityType.SPORTS_CLUB),
                raw("Barcelona", EntityType.LOCATION),
            ],
        )

        assert [d.type for d in detections] == [EntityType.SPORTS_CLUB, EntityType.LOCATION]

    def test_blank_values_dropped(self):
        detections = normalize_detections("Some text", [raw("   "), raw("")])

        assert detections == []

    def test_value_is_trimmed_before_span_lookup(self):
        detections = normalize_detections("Hello John world", [raw("  john  ")])

        assert detections[0].value == "john"
        assert (detections[0].start_offset, detections[0].end_offset) == (6, 10)

    def test_defaults(self):
        detections = normalize_detections("Someone did something", [raw("Someone")])

        detection = detections[0]
        assert detection.confidence == 0.75
        assert detection.reason == DEFAULT_REASON
        assert detection.display_name == "Someone"
        assert detection.description is None
        assert detection.wiki_url is None

    def test_display_name_from_candidate(self):
        detections = normalize_detections(
            "Встреча с Путиным",
            [raw("Путиным", display_name=" Владимир Путин ")],
        )

        assert detections[0].display_name == "Владимир Путин"
        assert detections[0].value == "Путиным"

    def test_invalid_wiki_url_dropped(self):
        detections = normalize_detections(
            "Elon Musk tweeted",
            [raw("Elon Musk", wiki_url="wikipedia: Elon Musk")],
        )

        assert detections[0].wiki_url is None

    def test_valid_wiki_url_kept(self):
        detections = normalize_detections(
            "Elon Musk tweeted",
            [raw(
                "Elon Musk",
                description="CEO of SpaceX",
                wiki_url="https://en.wikipedia.org/wiki/Elon_Musk",
            )],
        )

        assert detections[0].description == "CEO of SpaceX"
        assert detections[0].wiki_url == "https://en.wikipedia.org/wiki/Elon_Musk"

    def test_unlocated_value_has_null_offsets(self):
        detections = normalize_detections("No matching text here", [raw("Ghost Entity")])

        assert detections[0].start_offset is None
        assert detections[0].end_offset is None

    def test_sorted_by_offset_with_unlocated_last(self):
        source = "Alice flew to Berlin with Bob"
        detections = normalize_detections(
            source,
            [
                raw("Ghost A"),
                raw("Berlin", EntityType.LOCATION),
                raw("Ghost B"),
                raw("Bob"),
                raw("Alice"),
            ],
        )

        assert [d.value for d in detections] == ["Alice", "Berlin", "Bob", "Ghost A", "Ghost B"]

    def test_offsets_are_ordered(self):
        source = "Real Madrid beat Barcelona in Madrid"
        detections = normalize_detections(
            source,
            [
                raw("Madrid", EntityType.LOCATION),
                raw("Barcelona", EntityType.SPORTS_CLUB),
                raw("Real Madrid", EntityType.SPORTS_CLUB),
            ],
        )

        for detection in detections:
            assert detection.start_offset <= detection.end_offset
            assert source[detection.start_offset:detection.end_offset].lower() == detection.value.lower()

    def test_to_dict_uses_camel_case(self):
        detection = normalize_detections("Hello John", [raw("John")])[0]

        assert detection.to_dict() == {
            "type": "person",
            "value": "John",
            "displayName": "John",
            "normalizedValue": "john",
            "confidence": 0.75,
            "startOffset": 6,
            "endOffset": 10,
            "reason": "Extracted by LLM",
            "description": None,
            "wikiUrl": None,
        }
