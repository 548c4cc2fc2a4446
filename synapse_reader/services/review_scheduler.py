"""
SM-2 review scheduling

A single pure function: given the recall quality of one review and the card's
current state, compute the next interval, ease factor and repetition count.
"""

import math
from dataclasses import dataclass

from synapse_reader.core.exceptions import ValidationError

MIN_EASE_FACTOR = 1.3
FIRST_INTERVAL_DAYS = 1
SECOND_INTERVAL_DAYS = 6
PASSING_QUALITY = 3


@dataclass(frozen=True)
class ReviewSchedule:
    interval_days: int
    ease_factor: float
    repetitions: int


def schedule_review(
    quality: int,
    interval_days: int,
    ease_factor: float,
    repetitions: int,
) -> ReviewSchedule:
    """
    Compute the next schedule for a card

    Args:
        quality: Recall quality, integer 0 (blackout) to 5 (perfect)
        interval_days: Current interval
        ease_factor: Current ease factor
        repetitions: Consecutive successful reviews so far

    Returns:
        ReviewSchedule with the new interval, ease factor and repetitions

    Raises:
        ValidationError: quality is not an integer in 0..5
    """
    # bool is an int subclass; True/False are not grades
    if isinstance(quality, bool) or not isinstance(quality, int) or not 0 <= quality <= 5:
        raise ValidationError(f"Quality must be an integer between 0 and 5, got {quality!r}")

    penalty = 5 - quality
    new_ease = max(MIN_EASE_FACTOR, ease_factor + 0.1 - penalty * (0.08 + penalty * 0.02))

    if quality < PASSING_QUALITY:
        return ReviewSchedule(
            interval_days=FIRST_INTERVAL_DAYS,
            ease_factor=new_ease,
            repetitions=0,
        )

    if repetitions == 0:
        new_interval = FIRST_INTERVAL_DAYS
    elif repetitions == 1:
        new_interval = SECOND_INTERVAL_DAYS
    else:
        # Exact halves round up
        new_interval = math.floor(interval_days * new_ease + 0.5)

    return ReviewSchedule(
        interval_days=new_interval,
        ease_factor=new_ease,
        repetitions=repetitions + 1,
    )
