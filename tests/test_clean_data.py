import pandas as pd

from debate_topics.clean_data import clean_records, clean_text, compile_patterns, dedupe_comments
from debate_topics.config import DEBATE_MARKER, EXCLUDED_AUTHORS, load_cleanup_patterns
from debate_topics.load_data import prepare_comments


FOOTNOTE = (
    "_____\n\n> *Hello, users of CMV! This is a footnote from your moderators. "
    "Please remember to* ***[read through our rules](http://www.reddit.com/r/changemyview/wiki/rules)***. "
    "*Happy CMVing!*"
)


def test_clean_records_keeps_debates_and_valid_commenters(small_threads, small_comments):
    threads, comments = clean_records(small_threads, small_comments)

    assert sorted(threads["id"]) == ["t1", "t2"]
    assert len(comments) == 3
    assert set(zip(comments["author"], comments["thread"])) == {
        ("bob", "t1"), ("carol", "t2"), ("dave", "t1"),
    }
    assert threads.set_index("id")["n_commenters"].to_dict() == {"t1": 2, "t2": 1}


def test_cleaned_comments_never_from_op_bots_or_deleted(small_threads, small_comments):
    threads, comments = clean_records(small_threads, small_comments)
    op = comments["thread"].map(threads.set_index("id")["author"])
    assert not (comments["author"] == op).any()
    assert not comments["author"].isin(EXCLUDED_AUTHORS).any()
    assert not comments.duplicated(["author", "thread"]).any()


def test_cleaned_titles_have_no_marker_or_urls(small_threads, small_comments):
    threads, _ = clean_records(small_threads, small_comments)
    assert not threads["title"].str.contains(DEBATE_MARKER, regex=False).any()
    assert not threads["title"].str.contains("http").any()
    assert threads.set_index("id").loc["t1", "text"] == "See for details"


def test_threads_without_surviving_comments_are_dropped(small_threads, small_comments):
    comments = small_comments[small_comments["thread"] != "t1"]
    threads, _ = clean_records(small_threads, comments)
    assert threads["id"].tolist() == ["t2"]


def test_dedupe_keeps_earliest_comment():
    comments = prepare_comments(pd.DataFrame({
        "id": ["late", "early"], "thread": ["t1", "t1"], "author": ["bob", "bob"],
        "timestamp": ["2015-01-02", "2015-01-01"],
    }))
    assert dedupe_comments(comments)["id"].tolist() == ["early"]


def test_clean_text_strips_footnote_links_and_markdown():
    patterns = compile_patterns(load_cleanup_patterns())
    text = f"CMV: **Bold** claim, see [source](https://example.org/a?b=1) &amp; more.\n\n{FOOTNOTE}"
    cleaned = clean_text(text, patterns)
    assert cleaned == "Bold claim, see source & more."


def test_clean_text_handles_missing_values():
    assert clean_text(float("nan"), []) == ""


def test_clean_text_removes_urls_regardless_of_case():
    patterns = compile_patterns(load_cleanup_patterns())
    cleaned = clean_text("CMV: read HTTPS://Example.com/x and WWW.Example.org first", patterns)
    assert cleaned == "read and first"
    assert clean_text("see [Docs](HTTP://example.com) here", patterns) == "see Docs here"


def test_link_text_cannot_reintroduce_marker():
    patterns = compile_patterns(load_cleanup_patterns())
    cleaned = clean_text("CMV: [CMV](http://x.org): title", patterns)
    assert DEBATE_MARKER not in cleaned
    assert cleaned == "title"
