# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Storytime - Memory Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


import enum
from dataclasses import replace
from typing import Iterable, List

from storytime.services.snapshots import StorySnapshot
from storytime.utils.time_utils import epoch_seconds


class GroupingMode(str, enum.Enum):
    none = "none"
    domain = "domain"
    tag = "tag"


def _by_created_at(stories: Iterable[StorySnapshot]) -> List[StorySnapshot]:
    return sorted(stories, key=lambda s: epoch_seconds(s.created_at))


def _domain_collation_key(story: StorySnapshot) -> str:
    """
    Case-insensitive key for the domain name (str.casefold).
    Independent of the process locale, so ordering is the same on every host.
    """
    return (story.domain or "").casefold()


def expand_by_tag(stories: Iterable[StorySnapshot]) -> List[StorySnapshot]:
    """One item per tag; untagged stories stay a single item."""
    expanded: List[StorySnapshot] = []
    for story in stories:
        if not story.anchor_tags:
            expanded.append(story)
            continue
        for tag in story.anchor_tags:
            expanded.append(replace(story, id=f"{story.id}-{tag}", anchor_tags=(tag,)))
    return expanded


def group_stories(stories: Iterable[StorySnapshot], mode: GroupingMode = GroupingMode.none) -> List[StorySnapshot]:
    """
    Orders a user's stories for replay.

    Always chronological first. "domain" then re-sorts by domain name,
    keeping chronological order inside a domain. "tag" flattens each story
    into one item per tag and re-sorts chronologically, so copies of a
    story stay adjacent.
    """
    mode = GroupingMode(mode)
    ordered = _by_created_at(stories)

    if mode is GroupingMode.domain:
        return sorted(ordered, key=_domain_collation_key)
    if mode is GroupingMode.tag:
        return _by_created_at(expand_by_tag(ordered))
    return ordered


class ReplayCursor:
    """Circular index over a replay list."""

    def __init__(self, length: int, index: int = 0):
        self.length = max(0, int(length))
        self.index = index % self.length if self.length else 0

    def next(self) -> int:
        if self.length:
            self.index = (self.index + 1) % self.length
        return self.index

    def previous(self) -> int:
        if self.length:
            self.index = self.length - 1 if self.index == 0 else self.index - 1
        return self.index

    def reset(self) -> int:
        self.index = 0
        return self.index
