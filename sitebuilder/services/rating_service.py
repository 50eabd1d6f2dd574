def running_mean(average: float, count: int, rating: float) -> float:
    """Fold one more rating into an average taken over `count` ratings."""
    average = average or 0.0
    count = count or 0
    return (average * count + rating) / (count + 1)


def apply_rating(target, rating: int) -> None:
    """Update `target.rating` and `target.review_count` in place."""
    target.rating = running_mean(target.rating, target.review_count, rating)
    target.review_count = (target.review_count or 0) + 1
