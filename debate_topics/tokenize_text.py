# Tokenization
# ------------
# Turns sampled threads into a sparse (thread, word) -> count table.

import logging
import re

import pandas as pd

from debate_topics.config import (
    MIN_DOC_FREQ,
    MIN_TOKEN_LENGTH,
    load_domain_stopwords,
    load_generic_stopwords,
)

logger = logging.getLogger(__name__)

TOKEN_PATTERN = re.compile(r"[\w']+")
LETTER_RUN = re.compile(r"[a-z']*[a-z][a-z']*")


def build_stop_words(extra=None):
    stop_words = load_generic_stopwords() | load_domain_stopwords()
    if extra:
        stop_words |= {w.lower() for w in extra}
    return stop_words


def split_words(text):
    return TOKEN_PATTERN.findall(text.lower())


def letter_run(token):
    # Longest run of letters/apostrophes; the first one wins on ties.
    runs = LETTER_RUN.findall(token)
    if not runs:
        return ""
    return max(runs, key=len)


def tokenize_documents(docs, stop_words, min_length=MIN_TOKEN_LENGTH, min_doc_freq=MIN_DOC_FREQ):
    rows = []
    for thread, title, text in zip(docs["id"], docs["title"], docs["text"]):
        for token in split_words(f"{title} {text}"):
            if token in stop_words:
                continue
            word = letter_run(token)
            if len(word) > min_length:
                rows.append((thread, word))

    tokens = pd.DataFrame(rows, columns=["thread", "word"])

    # Drop words that appear in too few of the sampled documents
    doc_freq = tokens.drop_duplicates().groupby("word")["thread"].size() / len(docs)
    common = doc_freq[doc_freq > min_doc_freq].index
    tokens = tokens[tokens["word"].isin(common)]

    counts = tokens.groupby(["thread", "word"]).size().reset_index(name="n")
    logger.info("Tokenized %d documents: %d distinct words, %d (thread, word) rows",
                counts["thread"].nunique(), counts["word"].nunique(), len(counts))
    return counts
