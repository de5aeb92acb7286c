# Network Visualization
# ---------------------
# Draws the projected commenter network: colour = dominant topic,
# size = eigenvector centrality.

import logging
import os

import matplotlib
import matplotlib.pyplot as plt
import networkx as nx
import pandas as pd
from matplotlib.patches import Patch

from debate_topics.config import N_TOPICS, RANDOM_SEED

logger = logging.getLogger(__name__)

NO_TOPIC_COLOR = "lightgrey"


def topic_colors(n_topics=N_TOPICS):
    cmap = matplotlib.colormaps["tab10" if n_topics <= 10 else "tab20"]
    return {topic: cmap((topic - 1) % cmap.N) for topic in range(1, n_topics + 1)}


def plot_user_network(G, centrality, path, n_topics=N_TOPICS):
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    plt.figure(figsize=(12, 10))

    if G.number_of_nodes() == 0:
        logger.warning("User network is empty, writing a blank figure to %s", path)
    else:
        pos = nx.spring_layout(G, weight="weight", seed=RANDOM_SEED)
        palette = topic_colors(n_topics)
        stats = centrality.set_index("user")

        nodes = list(G.nodes())
        topics = [stats.at[n, "dominant_topic"] for n in nodes]
        node_colors = [NO_TOPIC_COLOR if pd.isna(t) else palette[int(t)] for t in topics]
        eigen = stats.loc[nodes, "eigenvector"].to_numpy()
        node_sizes = 30 + 600 * eigen / (eigen.max() or 1.0)

        weights = [d["weight"] for _, _, d in G.edges(data=True)]
        max_weight = max(weights, default=1)
        nx.draw_networkx_edges(G, pos, width=[0.3 + 2.0 * w / max_weight for w in weights], alpha=0.3)
        nx.draw_networkx_nodes(G, pos, nodelist=nodes, node_color=node_colors,
                               node_size=node_sizes, alpha=0.85)

        present = sorted({int(t) for t in topics if not pd.isna(t)})
        legend = [Patch(facecolor=palette[t], label=f"Topic {t}") for t in present]
        if legend:
            plt.legend(handles=legend, loc="upper left", bbox_to_anchor=(1.0, 1.0), title="Dominant topic")

    plt.title("Commenter Network by Dominant Topic")
    plt.axis("off")
    plt.tight_layout()
    plt.savefig(path, dpi=300)
    plt.close()
    logger.info("Saved network visualization to %s", path)
