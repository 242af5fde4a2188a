# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Storytime - Memory Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


from typing import Iterable, List, Optional


def merge_anchor_tags(*tag_lists: Optional[Iterable[str]]) -> List[str]:
    """
    Combine tag lists in order, trimming whitespace and dropping blanks.
    First occurrence wins, so the result never holds duplicates.
    """
    merged: List[str] = []
    seen = set()
    for tags in tag_lists:
        for tag in tags or []:
            cleaned = (tag or "").strip()
            if not cleaned or cleaned in seen:
                continue
            seen.add(cleaned)
            merged.append(cleaned)
    return merged
