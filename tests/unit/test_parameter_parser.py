from datetime import datetime, timezone

import pytest

from article_query.models.article import ArticleStatus
from article_query.models.filter_spec import SORTABLE_FIELDS, SortOrder
from article_query.services.parameter_parser import ParameterParser, ParseError, parse


def test_empty_map_uses_defaults():
    spec = parse({})

    assert spec.title is None
    assert spec.author is None
    assert spec.category is None
    assert spec.tags is None
    assert spec.status is None
    assert spec.min_read_time is None
    assert spec.max_read_time is None
    assert spec.published_after is None
    assert spec.published_before is None
    assert spec.sort_by == "createdAt"
    assert spec.sort_order is SortOrder.DESC
    assert spec.page == 0
    assert spec.size == 20


def test_full_parameter_set():
    spec = parse({
        "title": "Basics",
        "author": "jdoe",
        "category": "programming",
        "tags": "kotlin, jvm",
        "status": "Published",
        "minReadTime": "3",
        "maxReadTime": "10",
        "publishedAfter": "2024-01-01T00:00:00Z",
        "publishedBefore": "2024-12-31T23:59:59+02:00",
        "sortBy": "viewCount",
        "sortOrder": "ASC",
        "page": "2",
        "size": "50",
    })

    assert spec.title == "Basics"
    assert spec.author == "jdoe"
    assert spec.category == "programming"
    assert spec.tags == frozenset({"kotlin", "jvm"})
    assert spec.status is ArticleStatus.PUBLISHED
    assert (spec.min_read_time, spec.max_read_time) == (3, 10)
    assert spec.published_after == datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert spec.published_before.utcoffset().total_seconds() == 7200
    assert spec.sort_by == "viewCount"
    assert spec.sort_order is SortOrder.ASC
    assert (spec.page, spec.size) == (2, 50)


def test_tags_are_split_trimmed_and_deduplicated():
    spec = parse({"tags": " go,,Go , go ,rust,"})
    assert spec.tags == frozenset({"go", "Go", "rust"})


def test_blank_tags_parameter_means_no_tag_filter():
    assert parse({"tags": " , ,"}).tags is None


@pytest.mark.parametrize("value", ["DRAFT", "draft", "Draft", "dRaFt"])
def test_status_is_case_insensitive(value):
    assert parse({"status": value}).status is ArticleStatus.DRAFT


def test_unknown_status_lists_allowed_values():
    with pytest.raises(ParseError) as excinfo:
        parse({"status": "deleted"})

    error = excinfo.value
    assert error.field == "status"
    assert error.rejected_value == "deleted"
    assert error.allowed_values == ("draft", "published", "archived")


def test_unknown_sort_order_is_rejected():
    with pytest.raises(ParseError) as excinfo:
        parse({"sortOrder": "up"})
    assert excinfo.value.field == "sortOrder"
    assert excinfo.value.allowed_values == ("asc", "desc")


def test_unknown_sort_key_is_rejected():
    with pytest.raises(ParseError) as excinfo:
        parse({"sortBy": "id; DROP TABLE"})
    assert excinfo.value.field == "sortBy"
    assert excinfo.value.allowed_values == SORTABLE_FIELDS


def test_sort_key_is_case_sensitive():
    with pytest.raises(ParseError):
        parse({"sortBy": "viewcount"})


def test_negative_page_is_rejected():
    with pytest.raises(ParseError) as excinfo:
        parse({"page": "-1"})
    assert excinfo.value.field == "page"
    assert excinfo.value.rejected_value == "-1"


@pytest.mark.parametrize("value", ["abc", "1.5", " 3", "+3", "1_000", ""])
def test_numeric_parsing_is_strict(value):
    with pytest.raises(ParseError) as excinfo:
        parse({"minReadTime": value})
    assert excinfo.value.field == "minReadTime"


def test_negative_read_time_is_rejected():
    with pytest.raises(ParseError) as excinfo:
        parse({"maxReadTime": "-5"})
    assert excinfo.value.field == "maxReadTime"


@pytest.mark.parametrize("field", ["minReadTime", "maxReadTime", "page", "size"])
def test_oversized_digit_string_is_a_parse_error(field):
    with pytest.raises(ParseError) as excinfo:
        parse({field: "9" * 5000})
    assert excinfo.value.field == field
    assert excinfo.value.reason == "must be an integer"


@pytest.mark.parametrize("value", ["0", "101", "-1"])
def test_out_of_range_size_is_an_error_not_clamped(value):
    with pytest.raises(ParseError) as excinfo:
        parse({"size": value})
    assert excinfo.value.field == "size"


@pytest.mark.parametrize("value", ["1", "100"])
def test_size_bounds_are_inclusive(value):
    assert parse({"size": value}).size == int(value)


@pytest.mark.parametrize("value", ["yesterday", "2024-01-01", "2024-01-01T10:00:00", "2024-13-01T00:00:00Z"])
def test_malformed_or_offsetless_instants_are_rejected(value):
    with pytest.raises(ParseError) as excinfo:
        parse({"publishedAfter": value})
    assert excinfo.value.field == "publishedAfter"


def test_read_time_range_must_be_ordered():
    with pytest.raises(ParseError) as excinfo:
        parse({"minReadTime": "15", "maxReadTime": "10"})
    assert "minReadTime" in excinfo.value.field
    assert "maxReadTime" in excinfo.value.field


def test_equal_bounds_are_allowed():
    spec = parse({
        "minReadTime": "7",
        "maxReadTime": "7",
        "publishedAfter": "2024-05-01T00:00:00Z",
        "publishedBefore": "2024-05-01T00:00:00Z",
    })
    assert spec.min_read_time == spec.max_read_time == 7


def test_published_range_must_be_ordered():
    with pytest.raises(ParseError) as excinfo:
        parse({
            "publishedAfter": "2024-06-01T00:00:00Z",
            "publishedBefore": "2024-05-01T00:00:00Z",
        })
    assert excinfo.value.field == "publishedAfter,publishedBefore"


def test_first_violation_wins_in_declared_field_order():
    with pytest.raises(ParseError) as excinfo:
        parse({"size": "0", "page": "-1", "status": "bogus", "minReadTime": "x"})
    assert excinfo.value.field == "status"


def test_field_errors_take_priority_over_cross_field_errors():
    with pytest.raises(ParseError) as excinfo:
        parse({"minReadTime": "15", "maxReadTime": "10", "size": "500"})
    assert excinfo.value.field == "size"


def test_half_open_ranges_are_allowed():
    spec = parse({"minReadTime": "10"})
    assert spec.min_read_time == 10
    assert spec.max_read_time is None


def test_unknown_keys_are_ignored():
    assert parse({"foo": "bar"}).page == 0


def test_error_renders_structured_body():
    with pytest.raises(ParseError) as excinfo:
        parse({"sortOrder": "sideways"})

    assert excinfo.value.to_dict() == {
        "field": "sortOrder",
        "rejectedValue": "sideways",
        "reason": "unrecognized value",
        "allowedValues": ["asc", "desc"],
    }


def test_error_without_allowed_values_renders_none():
    with pytest.raises(ParseError) as excinfo:
        parse({"page": "two"})
    assert excinfo.value.to_dict()["allowedValues"] is None


def test_custom_defaults():
    parser = ParameterParser(default_size=10, max_size=50, default_sort_by="title", default_sort_order="ASC")
    spec = parser.parse({})

    assert spec.size == 10
    assert spec.sort_by == "title"
    assert spec.sort_order is SortOrder.ASC
    with pytest.raises(ParseError):
        parser.parse({"size": "51"})


@pytest.mark.parametrize(
    "kwargs",
    [
        {"max_size": 101},
        {"max_size": 0},
        {"default_size": 30, "max_size": 20},
        {"default_sort_by": "id"},
    ],
)
def test_invalid_parser_configuration(kwargs):
    with pytest.raises(ValueError):
        ParameterParser(**kwargs)


def test_parse_is_deterministic():
    raw = {"tags": "a,b", "status": "archived", "page": "3"}
    assert parse(raw) == parse(raw)
