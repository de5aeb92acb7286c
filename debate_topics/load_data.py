# Data Loading
# ------------
# Reads the thread and comment tables, coerces column types and derives
# the calendar columns used by the reports.

import logging
import os

import pandas as pd

logger = logging.getLogger(__name__)

THREAD_COLUMNS = ["id", "title", "text", "timestamp", "ups", "downs", "author"]
COMMENT_COLUMNS = ["id", "thread", "author", "timestamp"]


def parse_timestamps(values):
    # Numeric timestamps are epoch seconds, anything else is parsed as a date string.
    if pd.api.types.is_numeric_dtype(values):
        return pd.to_datetime(values, unit="s")
    return pd.to_datetime(values)


def require_columns(df, columns, name):
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise ValueError(f"The {name} table must contain the columns: {', '.join(missing)}")


def read_table(path, name):
    if not os.path.exists(path):
        raise FileNotFoundError(f"{name.capitalize()} dataset not found at {path}")
    return pd.read_csv(path)


def prepare_threads(df):
    require_columns(df, THREAD_COLUMNS, "threads")
    df = df.copy()
    df["id"] = df["id"].astype(str)
    df["author"] = df["author"].astype(str)
    df["title"] = df["title"].fillna("").astype(str)
    df["text"] = df["text"].fillna("").astype(str)
    df["timestamp"] = parse_timestamps(df["timestamp"])
    df["ups"] = df["ups"].astype(int)
    df["downs"] = df["downs"].astype(int)

    df["week"] = df["timestamp"].dt.to_period("W").dt.start_time
    df["month"] = df["timestamp"].dt.to_period("M").dt.start_time
    df["year"] = df["timestamp"].dt.year.astype(int)
    return df


def prepare_comments(df):
    require_columns(df, COMMENT_COLUMNS, "comments")
    df = df.copy()
    df["id"] = df["id"].astype(str)
    df["thread"] = df["thread"].astype(str)
    df["author"] = df["author"].astype(str)
    df["timestamp"] = parse_timestamps(df["timestamp"])
    df["year"] = df["timestamp"].dt.year.astype(int)
    return df


def load_threads(path):
    threads = prepare_threads(read_table(path, "threads"))
    logger.info("Loaded %d threads from %s", len(threads), path)
    return threads


def load_comments(path):
    comments = prepare_comments(read_table(path, "comments"))
    logger.info("Loaded %d comments from %s", len(comments), path)
    return comments


def restrict_to_threads(comments, threads):
    return comments[comments["thread"].isin(threads["id"])].reset_index(drop=True)


def load_data(threads_path, comments_path):
    threads = load_threads(threads_path)
    comments = restrict_to_threads(load_comments(comments_path), threads)
    logger.info("%d comments belong to known threads", len(comments))
    return threads, comments
