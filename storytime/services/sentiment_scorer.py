# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Storytime - Memory Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


import re

POSITIVE_WORDS = frozenset([
    "happy", "joy", "joyful", "love", "great", "good", "wonderful", "amazing", "excited",
])
NEGATIVE_WORDS = frozenset([
    "sad", "angry", "bad", "terrible", "horrible", "frustrated", "depressed",
])

_TOKEN_SPLIT = re.compile(r"\W+")


def get_sentiment_tally(text: str) -> int:
    """+1 per positive word, -1 per negative word. Other tokens are ignored."""
    tally = 0
    for word in _TOKEN_SPLIT.split((text or "").lower()):
        if word in POSITIVE_WORDS:
            tally += 1
        elif word in NEGATIVE_WORDS:
            tally -= 1
    return tally


def get_emotion_score(text: str) -> int:
    """
    Maps entry text onto the 1..5 emotion scale.

    Coarse keyword heuristic, the thresholds are part of the stored data
    contract (existing stories were scored with them).
    """
    tally = get_sentiment_tally(text)

    if tally > 2:
        return 5
    if tally > 0:
        return 4
    if tally == 0:
        return 3
    if tally > -3:
        return 2
    return 1
