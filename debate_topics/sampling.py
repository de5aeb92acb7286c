# Thread Sampling
# ---------------
# Only popular threads go into the topic model, which keeps the corpus small
# enough to fit in one pass.

import logging

from debate_topics.config import MIN_COMMENTERS, MIN_UPS

logger = logging.getLogger(__name__)


def sample_threads(threads, min_ups=MIN_UPS, min_commenters=MIN_COMMENTERS):
    keep = (threads["ups"] > min_ups) & (threads["n_commenters"] > min_commenters)
    docs = threads[keep].reset_index(drop=True)
    if docs.empty:
        raise ValueError(
            f"No threads left to model (need ups > {min_ups} and more than "
            f"{min_commenters} unique commenters)."
        )
    logger.info("Sampled %d of %d threads for topic modelling", len(docs), len(threads))
    return docs
