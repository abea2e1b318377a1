"""SM-2 style spaced-repetition scheduling."""

from decimal import ROUND_HALF_UP, Decimal

from quicknote.domain.note import MIN_EASINESS, ReviewState
from quicknote.domain.rating import Rating

SECONDS_PER_DAY = 86400
PASSING_QUALITY = 3

EASINESS_DELTAS = {
    Rating.EASY: 0.10,
    Rating.GOOD: -0.08,
    Rating.HARD: -0.15,
}


def round_half_away_from_zero(value: float | Decimal) -> int:
    # ROUND_HALF_UP rounds ties away from zero for negative values too
    return int(Decimal(str(value)).quantize(Decimal(1), rounding=ROUND_HALF_UP))


class ReviewScheduler:
    """Computes the next review state of a note from a rating.

    The transition is a pure function of the current state, the rating and
    the time it is applied, so the same inputs always give the same result.
    """

    def apply(self, state: ReviewState, rating: Rating | str, now: float) -> ReviewState:
        """Apply a rating to a review state.

        Args:
            state: Current review state, left unmodified
            rating: Rating or its case-insensitive name
            now: Time the rating is applied (seconds since epoch)

        Returns:
            The new review state

        Raises:
            InvalidRating: If the rating is not one of the four ratings
        """
        rating = Rating.parse(rating)

        if rating.quality >= PASSING_QUALITY:
            streak = state.streak + 1
            # Easiness moves in hundredths, so keep it exact to two decimals
            easiness = max(MIN_EASINESS, round(state.easiness + EASINESS_DELTAS[rating], 2))
            product = Decimal(str(easiness)) * state.interval_days
            interval_days = max(1, round_half_away_from_zero(product))
        else:
            # Lapse: short re-exposure, easiness is kept
            streak = 0
            easiness = state.easiness
            interval_days = 1

        return ReviewState(
            due_at=now + interval_days * SECONDS_PER_DAY,
            interval_days=interval_days,
            streak=streak,
            easiness=easiness,
        )
