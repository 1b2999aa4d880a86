"""Tests for content validation and request parsing."""

import pytest

from conftest import BODY, make_content
from crosspost.content import (
    ContentPayload,
    build_request,
    check_content,
    parse_request,
)
from crosspost.errors import UnknownDestination, ValidationError
from crosspost.registry import Destination


def _body(**overrides):
    body = {
        "title": "Async Patterns for Reliable Systems",
        "summary": "A deep dive into resilient async orchestration patterns for production.",
        "content": BODY,
        "canonicalUrl": "",
        "imageUrl": "",
        "tags": "async, reliability, ,python",
        "platforms": ["twitter", "medium"],
    }
    body.update(overrides)
    return body


class TestCheckContent:
    def test_valid_content_has_no_issues(self, content):
        assert check_content(content) == []

    def test_minimum_lengths_are_inclusive(self):
        content = make_content(title="x" * 5, summary="y" * 24, content="z" * 100)
        assert check_content(content) == []

    def test_each_short_field_reported(self):
        content = make_content(title="abcd", summary="short", content="tiny")
        assert [i.field for i in check_content(content)] == ["title", "summary", "content"]

    def test_invalid_urls(self):
        content = make_content(canonical_url="ftp://example.com/x", image_url="example.com/a.png")
        issues = check_content(content)
        assert [i.field for i in issues] == ["canonicalUrl", "imageUrl"]

    def test_empty_url_is_absent(self):
        assert check_content(make_content(canonical_url="", image_url="")) == []

    def test_too_many_tags(self):
        content = make_content(tags=tuple(f"t{i}" for i in range(9)))
        assert [i.field for i in check_content(content)] == ["tags"]

    def test_blank_tags_do_not_count(self):
        content = make_content(tags=tuple(f"t{i}" for i in range(8)) + ("  ", ""))
        assert check_content(content) == []

    def test_non_string_title(self):
        issues = check_content(make_content(title=None))
        assert issues[0].field == "title"
        assert "string" in issues[0].message


def test_tags_list_coerced_to_tuple():
    content = ContentPayload(title="t", summary="s", content="c", tags=["a", "b"])
    assert content.tags == ("a", "b")


def test_build_request_normalizes(content):
    request = build_request(
        make_content(canonical_url="", tags=(" async ", "", "ops")),
        ["medium", "twitter", "medium"],
    )
    assert request.destinations == (Destination.MEDIUM, Destination.TWITTER)
    assert request.content.canonical_url is None
    assert request.content.tags == ("async", "ops")


def test_build_request_rejects_string_platforms(content):
    with pytest.raises(ValidationError) as exc_info:
        build_request(content, "twitter")
    assert exc_info.value.fields == ["platforms"]


def test_build_request_rejects_none_platforms(content):
    with pytest.raises(ValidationError):
        build_request(content, None)


class TestParseRequest:
    def test_parses_camel_case_body(self):
        request = parse_request(_body(canonicalUrl="https://blog.example.com/a"))
        assert request.content.canonical_url == "https://blog.example.com/a"
        assert request.content.image_url is None
        assert request.content.tags == ("async", "reliability", "python")
        assert request.destinations == (Destination.TWITTER, Destination.MEDIUM)

    def test_tags_list(self):
        request = parse_request(_body(tags=["a", " b "]))
        assert request.content.tags == ("a", "b")

    def test_missing_tags(self):
        body = _body()
        del body["tags"]
        assert parse_request(body).content.tags == ()

    def test_missing_fields(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_request({"platforms": ["twitter"]})
        assert exc_info.value.fields == ["title", "summary", "content"]

    def test_empty_platforms(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_request(_body(platforms=[]))
        assert exc_info.value.fields == ["platforms"]
        assert exc_info.value.issues[0].message == "Select at least one platform."

    def test_unknown_platform(self):
        with pytest.raises(UnknownDestination):
            parse_request(_body(platforms=["twitter", "friendster"]))

    def test_non_mapping_body(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_request(["not", "a", "dict"])
        assert exc_info.value.fields == ["body"]
