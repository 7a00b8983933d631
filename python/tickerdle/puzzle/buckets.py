"""Bucketing and attribute comparison."""

from __future__ import annotations

import math
from typing import Mapping, Optional

from .constants import (
    CATEGORICAL_ATTRIBUTES,
    NUMERIC_ATTRIBUTES,
    UNKNOWN_BUCKET_INDEX,
    UNKNOWN_BUCKET_LABEL,
)
from .schemas import (
    AttributeFeedback,
    Bucket,
    BucketDefinition,
    Entity,
    NumericComparison,
)


def _is_unknown(value: Optional[float]) -> bool:
    return value is None or math.isnan(value)


def bucket_of(value: Optional[float], definition: BucketDefinition) -> Bucket:
    """Return the first bucket whose upper bound is strictly above ``value``."""
    if _is_unknown(value):
        return Bucket(label=UNKNOWN_BUCKET_LABEL, index=UNKNOWN_BUCKET_INDEX)
    for index, bound in enumerate(definition.bounds):
        if value < bound.upper:
            return Bucket(label=bound.label, index=index)
    # The last bucket is open-ended.
    last = len(definition.bounds) - 1
    return Bucket(label=definition.bounds[last].label, index=last)


def compare_numeric(
    guess: Optional[float],
    answer: Optional[float],
    definition: BucketDefinition,
) -> NumericComparison:
    guess_bucket = bucket_of(guess, definition)
    answer_bucket = bucket_of(answer, definition)
    if guess_bucket.index == UNKNOWN_BUCKET_INDEX:
        # Unknown against unknown counts as a match on "not applicable".
        match = answer_bucket.index == UNKNOWN_BUCKET_INDEX
    else:
        match = guess_bucket.index == answer_bucket.index

    arrow = "none"
    if not _is_unknown(guess) and not _is_unknown(answer):
        if guess < answer:
            arrow = "up"
        elif guess > answer:
            arrow = "down"
    return NumericComparison(match=match, arrow=arrow)


def compare_exact(guess: Optional[str], answer: Optional[str]) -> bool:
    return (guess or "") == (answer or "")


def compare_entities(
    guess: Entity,
    answer: Entity,
    buckets: Mapping[str, BucketDefinition],
) -> list[AttributeFeedback]:
    """Per-attribute verdicts for ``guess`` against ``answer`` in tile order."""
    feedback: list[AttributeFeedback] = []
    for attribute in CATEGORICAL_ATTRIBUTES:
        guess_value = getattr(guess, attribute)
        feedback.append(
            AttributeFeedback(
                attribute=attribute,
                kind="exact",
                value=guess_value,
                match=compare_exact(guess_value, getattr(answer, attribute)),
            )
        )
    for attribute in NUMERIC_ATTRIBUTES:
        definition = buckets[attribute]
        guess_value = getattr(guess, attribute)
        comparison = compare_numeric(
            guess_value, getattr(answer, attribute), definition
        )
        feedback.append(
            AttributeFeedback(
                attribute=attribute,
                kind="numeric",
                value=guess_value,
                bucket=bucket_of(guess_value, definition).label,
                match=comparison.match,
                arrow=comparison.arrow if not comparison.match else "none",
            )
        )
    return feedback
