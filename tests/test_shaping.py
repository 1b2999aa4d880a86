"""Tests for the content transformer."""

import pytest

from conftest import make_content
from crosspost.errors import UnknownDestination
from crosspost.registry import Destination, all_keys
from crosspost.shaping import (
    DevtoPayload,
    FacebookPayload,
    LinkedInPayload,
    MediumPayload,
    TWEET_MAX_CHARS,
    TweetPayload,
    hashtags,
    shape,
    truncate,
    weighted_length,
)


@pytest.mark.parametrize("key", list(all_keys()))
def test_shaping_is_deterministic(content, key):
    assert shape(content, key) == shape(content, key)


@pytest.mark.parametrize("key", list(all_keys()))
def test_payload_variant_matches_destination(content, key):
    assert shape(content, key).destination is key


def test_unknown_key(content):
    with pytest.raises(UnknownDestination):
        shape(content, "myspace")


class TestHashtags:
    def test_strips_punctuation_and_dedupes(self):
        assert hashtags(("async", "C++", "dev-ops", "Async", "!!")) == "#async #C #devops"

    def test_empty(self):
        assert hashtags(()) == ""


class TestTruncate:
    def test_short_text_untouched(self):
        assert truncate("hello", 10) == "hello"

    def test_word_boundary(self):
        assert truncate("alpha beta gamma delta", 15) == "alpha beta..."

    def test_no_spaces(self):
        assert truncate("x" * 20, 10) == "xxxxxxx..."


class TestTwitter:
    def test_contains_title_hashtags_and_link(self, content):
        tweet = shape(content, Destination.TWITTER)
        assert isinstance(tweet, TweetPayload)
        assert tweet.text == (
            "Async Patterns for Reliable Systems\n\n#async #reliability\n\n"
            "https://blog.example.com/async-patterns"
        )

    def test_no_canonical_url(self):
        tweet = shape(make_content(canonical_url=None, tags=()), "twitter")
        assert tweet.text == "Async Patterns for Reliable Systems"

    def test_long_title_is_fitted(self):
        content = make_content(title="word " * 80, tags=("a",))
        tweet = shape(content, "twitter")
        body, url = tweet.text.rsplit("\n\n", 1)
        assert url == "https://blog.example.com/async-patterns"
        assert len(body) <= TWEET_MAX_CHARS - 25
        assert body.endswith("...")
        assert "#a" not in body

    def test_long_link_counts_as_wrapped_length(self):
        long_url = "https://blog.example.com/2026/10/" + "x" * 200
        tweet = shape(make_content(title="Async Patterns for Reliable Systems " * 8, canonical_url=long_url), "twitter")
        assert tweet.text.endswith(long_url)
        assert weighted_length(tweet.text) <= TWEET_MAX_CHARS


class TestWeightedLength:
    def test_plain_text(self):
        assert weighted_length("hello world") == 11

    def test_each_link_counts_as_23(self):
        assert weighted_length("https://example.com/a") == 23
        assert weighted_length("see http://a.io and https://b.io/" + "y" * 100) == len("see  and ") + 46


def test_linkedin(content):
    post = shape(content, "linkedin")
    assert isinstance(post, LinkedInPayload)
    assert post.commentary.startswith(content.summary)
    assert post.commentary.endswith("#async #reliability")
    assert post.link == content.canonical_url
    assert post.title == content.title


def test_facebook(content):
    post = shape(content, "facebook")
    assert isinstance(post, FacebookPayload)
    assert post.message.split("\n\n") == [content.title, content.summary, "#async #reliability"]
    assert post.link == content.canonical_url


class TestMedium:
    def test_renders_html(self, content):
        post = shape(content, "medium")
        assert isinstance(post, MediumPayload)
        assert post.content_html.startswith("<h1>Async Patterns for Reliable Systems</h1>")
        assert "<h2>Why async</h2>" in post.content_html
        assert "<strong>structured concurrency</strong>" in post.content_html
        assert "<li>bounded fan-out</li>" in post.content_html
        assert post.canonical_url == content.canonical_url

    def test_title_escaped_and_image(self):
        post = shape(make_content(title="Tips & <Tricks>", image_url="https://img.example.com/a.png"), "medium")
        assert "<h1>Tips &amp; &lt;Tricks&gt;</h1>" in post.content_html
        assert '<img src="https://img.example.com/a.png"' in post.content_html

    def test_tag_limit(self):
        post = shape(make_content(tags=tuple(f"tag{i}" for i in range(8))), "medium")
        assert post.tags == ("tag0", "tag1", "tag2", "tag3", "tag4")


class TestDevto:
    def test_keeps_markdown(self, content):
        post = shape(content, "devto")
        assert isinstance(post, DevtoPayload)
        assert post.body_markdown == content.content
        assert post.description == content.summary

    def test_tags_normalized(self):
        post = shape(make_content(tags=("Dev-Ops", "devops", "Python 3", "AI", "rust", "go")), "devto")
        assert post.tags == ("devops", "python3", "ai", "rust")
