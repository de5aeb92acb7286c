# Debate Topics Pipeline
# ----------------------
# Runs the whole analysis in one pass:
# load -> clean -> sample -> tokenize -> LDA -> reports -> commenter network.

import argparse
import logging
import os

from debate_topics import analysis_topic_modeling as topics_mod
from debate_topics import dashboard
from debate_topics import network_analysis as net
from debate_topics.clean_data import clean_records
from debate_topics.config import (
    ACTIVITY_YEAR,
    COMMENTS_PATH,
    N_TOP_DOCS,
    N_TOP_WORDS,
    N_TOPICS,
    REPORT_DIR,
    THREADS_PATH,
)
from debate_topics.load_data import load_data
from debate_topics.network_plot import plot_user_network
from debate_topics.sampling import sample_threads
from debate_topics.tokenize_text import build_stop_words, tokenize_documents

logger = logging.getLogger(__name__)

OUTPUT_FILES = {
    "thread_distributions": "thread_distributions.png",
    "topic_terms_plot": "topic_terms.png",
    "topic_preferences": "topic_preferences.png",
    "dominant_topics": "dominant_topics.png",
    "user_network_plot": "user_network.png",
    "topic_terms": "topic_terms.csv",
    "topic_documents": "topic_documents.csv",
    "topic_summary": "topic_summary.csv",
    "user_centrality": "user_centrality.csv",
    "user_network": "user_network.graphml",
}


def run_pipeline(threads_path=THREADS_PATH, comments_path=COMMENTS_PATH, report_dir=REPORT_DIR,
                 n_topics=N_TOPICS, stop_words=None, activity_year=ACTIVITY_YEAR,
                 with_coherence=True, **thresholds):
    """
    Run every stage and write all reports to ``report_dir``.

    Extra keyword arguments (``min_ups``, ``min_commenters``, ``lower``,
    ``upper``) override the sampling and activity thresholds.
    """
    os.makedirs(report_dir, exist_ok=True)
    paths = {key: os.path.join(report_dir, name) for key, name in OUTPUT_FILES.items()}

    # ============ LOAD + CLEAN ============
    threads, comments = load_data(threads_path, comments_path)
    threads, comments = clean_records(threads, comments)
    dashboard.plot_thread_distributions(threads, paths["thread_distributions"])

    # ============ SAMPLE + TOKENIZE ============
    sampling = {k: thresholds[k] for k in ("min_ups", "min_commenters") if k in thresholds}
    docs = sample_threads(threads, **sampling)
    if stop_words is None:
        stop_words = build_stop_words()
    tokens = tokenize_documents(docs, stop_words)

    # ============ FIT LDA MODEL ============
    model = topics_mod.fit_topic_model(tokens, n_topics=n_topics)
    terms = topics_mod.top_terms(model.beta, N_TOP_WORDS)
    top_docs = topics_mod.top_documents(model.gamma, docs, N_TOP_DOCS)
    for topic, group in terms.groupby("topic"):
        logger.info("Topic %d: %s", topic, ", ".join(group["term"]))

    coherence = None
    if with_coherence:
        logger.info("Calculating coherence score (this may take a minute)...")
        coherence = topics_mod.compute_coherence(terms, tokens)
        logger.info("Coherence Score (c_v): %.3f", coherence)

    terms.to_csv(paths["topic_terms"], index=False)
    top_docs.to_csv(paths["topic_documents"], index=False)
    topics_mod.summarize_topics(terms, top_docs).to_csv(paths["topic_summary"], index=False)
    dashboard.plot_topic_terms(terms, paths["topic_terms_plot"])
    dashboard.plot_topic_preferences(model.gamma, paths["topic_preferences"])

    # ============ COMMENTER NETWORK ============
    activity = {k: thresholds[k] for k in ("lower", "upper") if k in thresholds}
    affiliations = net.build_affiliations(comments, docs)
    affiliations = net.select_active_users(affiliations, year=activity_year, **activity)
    dominant = net.dominant_topics(affiliations, model.gamma)

    bipartite_graph = net.build_bipartite_graph(affiliations)
    G = net.project_users(bipartite_graph)
    centrality = net.compute_centralities(G)
    partition = net.detect_communities(G)
    users = net.annotate_users(G, centrality, dominant, partition)

    users.to_csv(paths["user_centrality"], index=False)
    net.save_graph(G, paths["user_network"])
    dashboard.plot_dominant_topic_counts(users, paths["dominant_topics"])
    plot_user_network(G, users, paths["user_network_plot"], n_topics=n_topics)

    logger.info("Analysis complete, reports written to %s", report_dir)
    return {
        "threads": threads,
        "comments": comments,
        "docs": docs,
        "tokens": tokens,
        "model": model,
        "coherence": coherence,
        "users": users,
        "graph": G,
        "paths": paths,
    }


def main(argv=None):
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s: %(message)s")

    parser = argparse.ArgumentParser(description="Topic model and commenter network of debate threads")
    parser.add_argument("--threads", default=THREADS_PATH, help="Path to the threads CSV")
    parser.add_argument("--comments", default=COMMENTS_PATH, help="Path to the comments CSV")
    parser.add_argument("--report-dir", default=REPORT_DIR, help="Directory for plots and tables")
    parser.add_argument("--n-topics", type=int, default=N_TOPICS, help="Number of LDA topics")
    parser.add_argument("--activity-year", type=int, default=ACTIVITY_YEAR,
                        help="Year used to select regular commenters (default: busiest year)")
    parser.add_argument("--no-coherence", action="store_true", help="Skip the c_v coherence score")
    args = parser.parse_args(argv)

    run_pipeline(
        threads_path=args.threads,
        comments_path=args.comments,
        report_dir=args.report_dir,
        n_topics=args.n_topics,
        activity_year=args.activity_year,
        with_coherence=not args.no_coherence,
    )


if __name__ == "__main__":
    main()
