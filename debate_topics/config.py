# Analysis settings
# -----------------
# Fixed parameters of the debate topic / commenter network analysis, plus
# loaders for the word lists and cleanup patterns kept under resources/.

import json
import os
from pathlib import Path

import nltk
from dotenv import load_dotenv

# Load environment variables from .env
load_dotenv()

RESOURCE_DIR = Path(__file__).parent / "resources"

# ===================== CONFIG ======================
DATA_DIR = os.getenv("DEBATE_DATA_DIR", "data")
THREADS_PATH = os.path.join(DATA_DIR, os.getenv("DEBATE_THREADS_FILE", "threads.csv"))
COMMENTS_PATH = os.path.join(DATA_DIR, os.getenv("DEBATE_COMMENTS_FILE", "comments.csv"))
REPORT_DIR = os.getenv("DEBATE_REPORT_DIR", "reports")

DEBATE_MARKER = "CMV:"
EXCLUDED_AUTHORS = ("DeltaBot", "AutoModerator", "[deleted]")

MIN_UPS = 11
MIN_COMMENTERS = 11

MIN_TOKEN_LENGTH = 2
MIN_DOC_FREQ = 0.01

N_TOPICS = 10
RANDOM_SEED = 1234
LDA_MAX_ITER = 50
N_TOP_WORDS = 10
N_TOP_DOCS = 5

ACTIVITY_LOWER = 6
ACTIVITY_UPPER = 16
ACTIVITY_YEAR = None  # None -> busiest year in the sampled affiliations
# ===================================================


def load_domain_stopwords(path=RESOURCE_DIR / "domain_stopwords.txt"):
    """Return the domain stop words: one per line, blank lines and '#' comments ignored."""
    words = set()
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            word = line.split("#", 1)[0].strip().lower()
            if word:
                words.add(word)
    return words


def load_cleanup_patterns(path=RESOURCE_DIR / "cleanup_patterns.json"):
    """Return the ordered list of (pattern, replacement) pairs applied to thread text."""
    with open(path, "r", encoding="utf-8") as f:
        pairs = json.load(f)
    return [(pattern, replacement) for pattern, replacement in pairs]


def load_generic_stopwords():
    # Download NLTK stopwords if not available
    try:
        from nltk.corpus import stopwords
        return set(stopwords.words("english"))
    except LookupError:
        nltk.download("stopwords", quiet=True)
        from nltk.corpus import stopwords
        return set(stopwords.words("english"))
