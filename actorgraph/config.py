"""
Central configuration for actorgraph.

Values come from the environment (optionally a .env file in the working
directory) with defaults that reproduce the classic batch programs.
"""

import logging
import os

from dotenv import load_dotenv

load_dotenv()

# --- Edge weighting ---
# Weighted mode gives a movie from year Y the weight (REFERENCE_YEAR - Y) + 1
REFERENCE_YEAR = int(os.getenv("ACTORGRAPH_REFERENCE_YEAR", "2018"))

# --- Link scoring ---
PREDICT_MAX = 4

# --- Output headers ---
PATH_HEADER = "(actor)--[movie#@year]-->(actor)--..."
PREDICT_HEADER = "Actor1,Actor2,Actor3,Actor4"
CORE_HEADER = "Actor"

# Separator between title and year in a movie's display key
MOVIE_KEY_SEPARATOR = "#@"

# --- Runtime ---
LOG_LEVEL = os.getenv("ACTORGRAPH_LOG_LEVEL", "INFO").upper()
SHOW_PROGRESS = os.getenv("ACTORGRAPH_PROGRESS", "1") not in ("0", "false", "False", "")

# HTTP service dataset (see actorgraph.api)
DATASET_PATH = os.getenv("ACTORGRAPH_DATASET_PATH", "movie_casts.tsv")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level=None):
    """Configure root logging once for CLI and service entry points."""
    logging.basicConfig(level=level or LOG_LEVEL, format=LOG_FORMAT)
