# Network Analysis of Commenters
# ------------------------------
# Builds a user <-> thread affiliation graph for regular commenters,
# projects it onto users (edge weight = shared threads) and computes
# centrality, communities and each user's dominant topic.

import logging

import community as community_louvain  # python-louvain
import networkx as nx
import numpy as np
import pandas as pd
from networkx.algorithms import bipartite

from debate_topics.config import ACTIVITY_LOWER, ACTIVITY_UPPER, RANDOM_SEED

logger = logging.getLogger(__name__)


def build_affiliations(comments, docs):
    affiliations = comments.loc[comments["thread"].isin(docs["id"]), ["author", "thread", "year"]]
    affiliations = affiliations.rename(columns={"author": "user"}).drop_duplicates(["user", "thread"])
    return affiliations.reset_index(drop=True)


def busiest_year(affiliations):
    counts = affiliations["year"].value_counts()
    return int(counts[counts == counts.max()].index.min())


def select_active_users(affiliations, year=None, lower=ACTIVITY_LOWER, upper=ACTIVITY_UPPER):
    # Regular but not power users: strictly between `lower` and `upper` threads in the year.
    if affiliations.empty:
        raise ValueError("No affiliations to select active users from.")
    if year is None:
        year = busiest_year(affiliations)
    in_year = affiliations[affiliations["year"] == year]
    activity = in_year.groupby("user")["thread"].size()
    active = activity[(activity > lower) & (activity < upper)].index
    selected = in_year[in_year["user"].isin(active)].reset_index(drop=True)
    logger.info("Year %d: %d of %d commenters have between %d and %d threads",
                year, len(active), len(activity), lower + 1, upper - 1)
    return selected


def dominant_topics(affiliations, gamma):
    """
    Pick each user's dominant topic: the topic with the highest mean
    membership weight over the threads they commented on.

    Ties go to the lowest topic id. Users whose threads were all dropped
    from the topic model get a missing value.
    """
    users = pd.Index(affiliations["user"].unique(), name="user")
    joined = affiliations.merge(gamma, left_on="thread", right_index=True, how="inner")
    means = joined.groupby("user")[list(gamma.columns)].mean()
    dominant = means.idxmax(axis=1).reindex(users).astype(float).astype("Int64")
    return dominant.rename("dominant_topic")


def build_bipartite_graph(affiliations):
    B = nx.Graph()
    B.add_nodes_from((("user", u) for u in affiliations["user"].unique()), bipartite=0)
    B.add_nodes_from((("thread", t) for t in affiliations["thread"].unique()), bipartite=1)
    B.add_edges_from(
        (("user", u), ("thread", t)) for u, t in zip(affiliations["user"], affiliations["thread"])
    )
    return B


def co_membership_matrix(B):
    user_nodes = [n for n, d in B.nodes(data=True) if d["bipartite"] == 0]
    thread_nodes = [n for n, d in B.nodes(data=True) if d["bipartite"] == 1]
    users = [name for _, name in user_nodes]
    if not thread_nodes:
        return pd.DataFrame(0, index=users, columns=users)

    incidence = bipartite.biadjacency_matrix(B, row_order=user_nodes, column_order=thread_nodes)
    shared = np.asarray((incidence @ incidence.T).todense()).astype(int)
    np.fill_diagonal(shared, 0)
    return pd.DataFrame(shared, index=users, columns=users)


def project_users(B):
    shared = co_membership_matrix(B)
    G = nx.from_numpy_array(shared.to_numpy())
    G = nx.relabel_nodes(G, dict(enumerate(shared.index)))
    for _, _, data in G.edges(data=True):
        data["weight"] = int(data["weight"])
        data["distance"] = 1.0 / data["weight"]
    logger.info("Projected user graph: %d nodes, %d edges", G.number_of_nodes(), G.number_of_edges())
    return G


def eigenvector_by_component(G):
    # Eigenvector centrality is only defined per connected component.
    scores = {}
    for component in nx.connected_components(G):
        if len(component) == 1:
            scores.update({n: 0.0 for n in component})
            continue
        subgraph = G.subgraph(component)
        scores.update(nx.eigenvector_centrality(subgraph, weight="weight", max_iter=1000))
    return scores


def compute_centralities(G):
    nodes = list(G.nodes())
    columns = ["user", "degree", "strength", "betweenness", "closeness", "eigenvector"]
    if not nodes:
        return pd.DataFrame(columns=columns)

    degree = dict(G.degree())
    strength = dict(G.degree(weight="weight"))
    betweenness = nx.betweenness_centrality(G, weight="distance", normalized=True)
    closeness = nx.closeness_centrality(G, distance="distance")
    eigenvector = eigenvector_by_component(G)

    rows = [
        {
            "user": n,
            "degree": degree[n],
            "strength": strength[n],
            "betweenness": betweenness[n],
            "closeness": closeness[n],
            "eigenvector": eigenvector[n],
        }
        for n in nodes
    ]
    return pd.DataFrame(rows, columns=columns)


def detect_communities(G):
    partition = community_louvain.best_partition(G, weight="weight", random_state=RANDOM_SEED)
    n_communities = len(set(partition.values()))
    if G.number_of_edges() > 0:
        modularity = community_louvain.modularity(partition, G, weight="weight")
        logger.info("Detected %d communities (modularity: %.3f)", n_communities, modularity)
    else:
        logger.info("Detected %d communities (graph has no edges)", n_communities)
    return partition


def annotate_users(G, centrality, dominant, partition):
    table = centrality.copy()
    table["dominant_topic"] = table["user"].map(dominant).astype("Int64")
    table["community"] = table["user"].map(partition)
    for row in table.itertuples(index=False):
        if not pd.isna(row.dominant_topic):
            G.nodes[row.user]["dominant_topic"] = int(row.dominant_topic)
        G.nodes[row.user]["community"] = int(row.community)
        G.nodes[row.user]["eigenvector"] = float(row.eigenvector)
    return table


def save_graph(G, path):
    """Save the projected graph in GraphML format for Gephi."""
    nx.write_graphml(G, path)
    logger.info("Saved user network to %s", path)
