# Data Cleaning
# -------------
# Keeps debate threads only, removes unwanted commenters, deduplicates
# (author, thread) pairs and strips boilerplate from thread text.

import logging
import re

from debate_topics.config import DEBATE_MARKER, EXCLUDED_AUTHORS, load_cleanup_patterns
from debate_topics.load_data import restrict_to_threads

logger = logging.getLogger(__name__)


def compile_patterns(patterns):
    # Order matters: the footnote and links go before the generic punctuation cleanup.
    return [(re.compile(pattern, re.DOTALL), replacement) for pattern, replacement in patterns]


def clean_text(text, patterns):
    if not isinstance(text, str):
        return ""
    for pattern, replacement in patterns:
        text = pattern.sub(replacement, text)
    text = re.sub(r"\s+", " ", text)
    return text.strip()


def filter_debate_threads(threads, marker=DEBATE_MARKER):
    keep = threads["title"].str.startswith(marker)
    return threads[keep].reset_index(drop=True)


def drop_unwanted_comments(comments, threads, excluded_authors=EXCLUDED_AUTHORS):
    # Comments by the thread's original poster are replies to their own view.
    op = comments["thread"].map(threads.set_index("id")["author"])
    keep = (comments["author"] != op) & ~comments["author"].isin(excluded_authors)
    return comments[keep].reset_index(drop=True)


def dedupe_comments(comments):
    comments = comments.sort_values("timestamp", kind="mergesort")
    comments = comments.drop_duplicates(subset=["author", "thread"], keep="first")
    return comments.reset_index(drop=True)


def clean_records(threads, comments, marker=DEBATE_MARKER,
                  excluded_authors=EXCLUDED_AUTHORS, patterns=None):
    if patterns is None:
        patterns = load_cleanup_patterns()
    patterns = compile_patterns(patterns)

    threads = filter_debate_threads(threads, marker)
    comments = restrict_to_threads(comments, threads)
    comments = drop_unwanted_comments(comments, threads, excluded_authors)
    threads = threads[threads["id"].isin(comments["thread"])].reset_index(drop=True)
    comments = dedupe_comments(comments)
    logger.info("Kept %d debate threads and %d unique (author, thread) comments",
                len(threads), len(comments))

    threads = threads.copy()
    commenters = comments.groupby("thread")["author"].nunique()
    threads["n_commenters"] = threads["id"].map(commenters).astype(int)
    threads["title"] = threads["title"].apply(lambda t: clean_text(t, patterns))
    threads["text"] = threads["text"].apply(lambda t: clean_text(t, patterns))
    return threads, comments
