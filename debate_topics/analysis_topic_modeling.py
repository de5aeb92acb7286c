# Topic Modeling Analysis
# -----------------------
# Fits an LDA topic model on the sampled debate threads.
# Outputs per-topic term weights (beta), per-thread topic weights (gamma),
# top terms / top threads per topic and a c_v coherence score.

import logging
from collections import namedtuple

import numpy as np
import pandas as pd
from gensim.corpora.dictionary import Dictionary
from gensim.models.coherencemodel import CoherenceModel
from scipy import sparse
from sklearn.decomposition import LatentDirichletAllocation

from debate_topics.config import LDA_MAX_ITER, N_TOP_DOCS, N_TOP_WORDS, N_TOPICS, RANDOM_SEED

logger = logging.getLogger(__name__)

TopicModel = namedtuple("TopicModel", ["lda", "dtm", "beta", "gamma"])


def build_document_term_matrix(tokens):
    if tokens.empty:
        raise ValueError("Document-term matrix is empty: no word survived the frequency filter.")
    documents = pd.Categorical(tokens["thread"])
    vocabulary = pd.Categorical(tokens["word"])
    dtm = sparse.csr_matrix(
        (tokens["n"].to_numpy(), (documents.codes, vocabulary.codes)),
        shape=(len(documents.categories), len(vocabulary.categories)),
    )
    return dtm, list(documents.categories), list(vocabulary.categories)


def fit_topic_model(tokens, n_topics=N_TOPICS, random_state=RANDOM_SEED, max_iter=LDA_MAX_ITER):
    """
    Fit a k-topic LDA model (batch variational Bayes) on a (thread, word, n) table.

    Topics are numbered 1..k. Every row of ``beta`` (topic x word) and of
    ``gamma`` (thread x topic) is a probability distribution.
    """
    dtm, documents, vocabulary = build_document_term_matrix(tokens)
    logger.info("Training LDA model: %d documents, %d terms, %d topics",
                dtm.shape[0], dtm.shape[1], n_topics)

    lda = LatentDirichletAllocation(
        n_components=n_topics,
        learning_method="batch",
        max_iter=max_iter,
        random_state=random_state,
    )
    doc_topic = lda.fit_transform(dtm)
    logger.info("LDA model trained (%d iterations, perplexity %.1f)",
                lda.n_iter_, lda.perplexity(dtm))

    topics = pd.Index(range(1, n_topics + 1), name="topic")
    term_weights = lda.components_ / lda.components_.sum(axis=1)[:, np.newaxis]
    beta = pd.DataFrame(term_weights, index=topics, columns=pd.Index(vocabulary, name="term"))
    gamma = pd.DataFrame(doc_topic, index=pd.Index(documents, name="thread"), columns=topics)
    return TopicModel(lda=lda, dtm=dtm, beta=beta, gamma=gamma)


def top_terms(beta, n_top_words=N_TOP_WORDS):
    # Extract top keywords for each topic.
    rows = []
    for topic, weights in beta.iterrows():
        best = weights.sort_values(ascending=False, kind="mergesort").head(n_top_words)
        for rank, (term, weight) in enumerate(best.items(), start=1):
            rows.append({"topic": topic, "term": term, "beta": weight, "rank": rank})
    return pd.DataFrame(rows, columns=["topic", "term", "beta", "rank"])


def tidy_gamma(gamma):
    long = gamma.stack().rename("gamma").reset_index()
    return long[["thread", "topic", "gamma"]]


def top_documents(gamma, threads, n_top_docs=N_TOP_DOCS):
    titles = threads.set_index("id")["title"]
    long = tidy_gamma(gamma).sort_values(["topic", "gamma"], ascending=[True, False], kind="mergesort")
    best = long.groupby("topic").head(n_top_docs).reset_index(drop=True)
    best["title"] = best["thread"].map(titles)
    return best


def compute_coherence(terms, tokens):
    # Compute topic coherence (c_v) using Gensim.
    texts = [
        [word for word, n in zip(group["word"], group["n"]) for _ in range(n)]
        for _, group in tokens.groupby("thread")
    ]
    dictionary = Dictionary(texts)
    cm = CoherenceModel(
        topics=[list(g["term"]) for _, g in terms.groupby("topic")],
        texts=texts,
        dictionary=dictionary,
        coherence="c_v",
        processes=1,
    )
    return cm.get_coherence()


def summarize_topics(terms, docs):
    topic_meta = []
    for topic, group in terms.groupby("topic"):
        examples = docs.loc[docs["topic"] == topic, "title"].fillna("")
        topic_meta.append({
            "topic_id": topic,
            "keywords": ", ".join(group.sort_values("rank")["term"]),
            "example_threads": " || ".join(examples.tolist()),
        })
    return pd.DataFrame(topic_meta)
