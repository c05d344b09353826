# ## File: config.py
# Version: 1.2.0
# Date: 2026-10-14
# Purpose: Central configuration for the proposal store.
#          - CHANGE (v1.2.0): Question templates and document placeholders
#            moved here from the generator modules.

import os
import string
from pathlib import Path

from .exceptions import ConfigurationError
from .utils import get_default_data_path

# --- Persistence ---
# Key of the single durable slot holding the serialized snapshot.
STORAGE_KEY = os.getenv("RFP_STORAGE_KEY", "rfp-suite-data")

# Directory used by the JSON file backend. Overridden with RFP_DATA_PATH.
DATA_DIR = Path(get_default_data_path())

# --- Share Links ---
SHARE_TOKEN_ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits


def _read_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}")
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value}")
    return value


SHARE_TOKEN_LENGTH = _read_int("RFP_SHARE_TOKEN_LENGTH", 16)

# --- Question Generation ---
# Fragments of the title/description must be longer than this to be echoed.
MIN_SENTENCE_LENGTH = 10

QUESTION_TEMPLATES = (
    "What are the main objectives for this project?",
    "What is the expected timeline and key milestones?",
    "What is the budget range and payment terms?",
    "What are the key technical or compliance requirements?",
    "Who are the main stakeholders and decision makers?",
    "What does success look like for this engagement?",
)

ELABORATION_PREFIX = "Please elaborate on: "

# --- Document Assembly ---
NO_ANSWER_PLACEHOLDER = "(No answer)"

INTRODUCTION_TEMPLATE = (
    "We are pleased to submit this proposal for {title}. The following sections "
    "detail our understanding and approach based on your requirements."
)

EXECUTIVE_SUMMARY_TEMPLATE = "This proposal outlines our approach for {title}. {description}"

# --- Seed Accounts ---
SEED_PASSWORD = os.getenv("RFP_SEED_PASSWORD", "password")
