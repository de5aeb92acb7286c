import networkx as nx
import numpy as np
import pandas as pd

from debate_topics import dashboard
from debate_topics.network_plot import plot_user_network, topic_colors


def test_thread_distribution_plot(tmp_path, small_threads):
    threads = small_threads.assign(n_commenters=[3, 5, 8])
    path = tmp_path / "dist.png"
    dashboard.plot_thread_distributions(threads, str(path))
    assert path.exists()


def test_topic_plots(tmp_path):
    terms = pd.DataFrame({
        "topic": [1, 1, 2, 2, 3, 3],
        "term": ["tax", "carbon", "guns", "rifle", "pizza", "cheese"],
        "beta": [0.4, 0.3, 0.5, 0.2, 0.6, 0.1],
        "rank": [1, 2, 1, 2, 1, 2],
    })
    terms_path = tmp_path / "terms.png"
    dashboard.plot_topic_terms(terms, str(terms_path))
    assert terms_path.exists()

    rng = np.random.default_rng(0)
    weights = rng.dirichlet([1.0, 1.0, 1.0], size=30)
    gamma = pd.DataFrame(weights, index=pd.Index([f"t{i}" for i in range(30)], name="thread"),
                         columns=pd.Index([1, 2, 3], name="topic"))
    prefs_path = tmp_path / "prefs.png"
    dashboard.plot_topic_preferences(gamma, str(prefs_path))
    assert prefs_path.exists()


def test_dominant_topic_counts_plot(tmp_path):
    users = pd.DataFrame({"user": ["a", "b", "c"],
                          "dominant_topic": pd.array([1, 2, None], dtype="Int64")})
    path = tmp_path / "dominant.png"
    dashboard.plot_dominant_topic_counts(users, str(path))
    assert path.exists()


def test_user_network_plot(tmp_path):
    G = nx.Graph()
    G.add_edge("a", "b", weight=2)
    G.add_edge("b", "c", weight=1)
    G.add_node("d")
    users = pd.DataFrame({
        "user": ["a", "b", "c", "d"],
        "eigenvector": [0.5, 0.7, 0.5, 0.0],
        "dominant_topic": pd.array([1, 2, 2, None], dtype="Int64"),
    })
    path = tmp_path / "nested" / "network.png"
    plot_user_network(G, users, str(path), n_topics=2)
    assert path.exists()


def test_empty_network_still_writes_image(tmp_path):
    path = tmp_path / "empty.png"
    plot_user_network(nx.Graph(), pd.DataFrame(columns=["user", "eigenvector", "dominant_topic"]),
                      str(path))
    assert path.exists()


def test_topic_colors_cover_every_topic():
    assert len(set(topic_colors(10).values())) == 10
