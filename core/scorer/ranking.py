from typing import List, TypeVar

T = TypeVar("T")


def rank_recommendations(recommendations: List[T]) -> List[T]:
    """Sort descending by score and assign dense ranks 1..N.

    sorted() is stable, so tied scores keep their input order. Items are
    mutated in place and returned in their new order.
    """
    ranked = sorted(recommendations, key=lambda r: r.score, reverse=True)
    for position, rec in enumerate(ranked, start=1):
        rec.rank = position
    return ranked
