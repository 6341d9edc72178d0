from decimal import ROUND_HALF_UP, Decimal

from .enums import ReviewStatus


def round_half_up(value, digits: int = 0):
    """Round like a percentage display does: halves go up, never to even."""
    exponent = Decimal(1).scaleb(-digits)
    rounded = Decimal(str(value)).quantize(exponent, rounding=ROUND_HALF_UP)
    return int(rounded) if digits == 0 else float(rounded)


def success_rate(total_success: int, total_reviews: int) -> float:
    if total_reviews == 0:
        return 0
    return total_success / total_reviews * 100


def summarize_cards(cards) -> dict:
    total_success = sum(c.success_count for c in cards)
    total_failures = sum(c.failure_count for c in cards)
    total_reviews = total_success + total_failures
    return {
        "total_cards": len(cards),
        "active_cards": sum(1 for c in cards if c.review_status == ReviewStatus.ACTIVE.value),
        "completed_cards": sum(1 for c in cards if c.review_status == ReviewStatus.COMPLETED.value),
        "challenging_cards": sum(
            1 for c in cards
            if c.review_status == ReviewStatus.ACTIVE.value and c.failure_count > c.success_count
        ),
        "total_reviews": total_reviews,
        "total_success": total_success,
        "total_failures": total_failures,
        "success_rate": round_half_up(success_rate(total_success, total_reviews)),
    }
