import matplotlib

matplotlib.use("Agg")

import pandas as pd
import pytest

from debate_topics.load_data import prepare_comments, prepare_threads

VOCAB_A = "carbon emissions climate warming energy pollution"
VOCAB_B = "guns firearms shooting rifle ownership amendment"


@pytest.fixture
def small_threads():
    return prepare_threads(pd.DataFrame({
        "id": ["t1", "t2", "t3"],
        "title": ["CMV: Cats are better than dogs", "CMV: Pineapple belongs on pizza",
                  "Meta: new moderator rules"],
        "text": ["See http://example.com for details", "It is sweet", "Announcement"],
        "timestamp": ["2015-03-01 10:00", "2015-03-02 11:00", "2015-03-03 12:00"],
        "ups": [20, 15, 30],
        "downs": [1, 2, 3],
        "author": ["alice", "bob", "AutoModerator"],
    }))


@pytest.fixture
def small_comments():
    return prepare_comments(pd.DataFrame({
        "id": ["c1", "c2", "c3", "c4", "c5"],
        "thread": ["t1", "t1", "t2", "t2", "t1"],
        "author": ["bob", "alice", "carol", "[deleted]", "dave"],
        "timestamp": ["2015-03-01 11:00", "2015-03-01 12:00", "2015-03-02 12:00",
                      "2015-03-02 13:00", "2015-03-01 14:00"],
    }))


def make_corpus(n_threads=20, n_users=30, per_user=12):
    """Threads alternate between two vocabularies; user i comments on `per_user` threads."""
    threads, comments = [], []
    for t in range(n_threads):
        vocab = VOCAB_A if t % 2 == 0 else VOCAB_B
        threads.append({
            "id": f"t{t}",
            "title": f"CMV: {vocab.split()[t % 6]} policy is wrong",
            "text": f"{vocab} {vocab} the and of https://example.com/{t}",
            "timestamp": f"2015-0{1 + t % 6}-1{t % 9} 12:00:00",
            "ups": 20 + t,
            "downs": t % 3,
            "author": f"op{t}",
        })
        # Comments from the thread author and from bots never count.
        comments.append({"id": f"op-{t}", "thread": f"t{t}", "author": f"op{t}",
                         "timestamp": "2015-07-01 00:00:00"})
        comments.append({"id": f"bot-{t}", "thread": f"t{t}", "author": "DeltaBot",
                         "timestamp": "2015-07-01 00:00:00"})

    for i in range(n_users):
        for t in range(n_threads):
            if (t + i) % n_threads < per_user:
                comments.append({"id": f"c{i}-{t}", "thread": f"t{t}", "author": f"user{i}",
                                 "timestamp": "2015-07-02 00:00:00"})

    threads.append({"id": "meta", "title": "Meta: state of the sub", "text": "rules",
                    "timestamp": "2015-01-05 00:00:00", "ups": 100, "downs": 0,
                    "author": "AutoModerator"})
    return pd.DataFrame(threads), pd.DataFrame(comments)


@pytest.fixture
def write_corpus(tmp_path):
    def _write(**kwargs):
        threads, comments = make_corpus(**kwargs)
        threads_path = tmp_path / "threads.csv"
        comments_path = tmp_path / "comments.csv"
        threads.to_csv(threads_path, index=False)
        comments.to_csv(comments_path, index=False)
        return str(threads_path), str(comments_path)
    return _write


@pytest.fixture
def corpus_files(write_corpus):
    return write_corpus()
