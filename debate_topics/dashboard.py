# Descriptive Reports
# -------------------
# Static plots of the cleaned threads, the topic model and the commenter
# network using Matplotlib and Seaborn.

import logging
import math
import os

import matplotlib.pyplot as plt
import seaborn as sns

logger = logging.getLogger(__name__)

sns.set(style="whitegrid")


def _save(path):
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    plt.tight_layout()
    plt.savefig(path, dpi=300)
    plt.close()
    logger.info("Saved %s", path)


def plot_thread_distributions(threads, path):
    fig, axes = plt.subplots(1, 3, figsize=(18, 5))

    sns.histplot(threads["ups"], bins=50, log_scale=(False, True), ax=axes[0])
    axes[0].set_title("Upvotes per Thread")
    axes[0].set_xlabel("Upvotes")

    sns.histplot(threads["n_commenters"], bins=50, ax=axes[1])
    axes[1].set_title("Unique Commenters per Thread")
    axes[1].set_xlabel("Commenters")

    monthly = threads.groupby("month").size().reset_index(name="threads")
    sns.lineplot(data=monthly, x="month", y="threads", marker="o", ax=axes[2])
    axes[2].set_title("Debate Threads per Month")
    axes[2].set_xlabel("Month")
    axes[2].tick_params(axis="x", rotation=45)

    _save(path)


def plot_topic_terms(terms, path):
    topics = sorted(terms["topic"].unique())
    ncols = min(5, len(topics))
    nrows = math.ceil(len(topics) / ncols)
    fig, axes = plt.subplots(nrows, ncols, figsize=(4 * ncols, 3.5 * nrows), squeeze=False)
    colors = sns.color_palette("tab10", len(topics))

    for ax, topic, color in zip(axes.flat, topics, colors):
        subset = terms[terms["topic"] == topic].sort_values("beta", ascending=False)
        sns.barplot(data=subset, x="beta", y="term", color=color, ax=ax)
        ax.set_title(f"Topic {topic}")
        ax.set_xlabel("beta")
        ax.set_ylabel("")
    for ax in list(axes.flat)[len(topics):]:
        ax.axis("off")

    plt.suptitle("Top Terms per Topic")
    _save(path)


def plot_topic_preferences(gamma, path):
    long = gamma.stack().rename("gamma").reset_index()
    long["topic"] = "Topic " + long["topic"].astype(str)
    plt.figure(figsize=(12, 6))
    sns.kdeplot(data=long, x="gamma", hue="topic", common_norm=False, palette="tab10", clip=(0, 1))
    plt.title("Distribution of Thread Membership by Topic")
    plt.xlabel("gamma (topic membership)")
    plt.ylabel("Density")
    _save(path)


def plot_dominant_topic_counts(users, path):
    counts = users["dominant_topic"].dropna().astype(int).value_counts().sort_index().reset_index()
    counts.columns = ["Topic ID", "Users"]
    plt.figure(figsize=(10, 5))
    sns.barplot(data=counts, x="Topic ID", y="Users", color="steelblue")
    plt.title("Network Users by Dominant Topic")
    plt.xlabel("Topic ID")
    plt.ylabel("Number of Users")
    _save(path)
