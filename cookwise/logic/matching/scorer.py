"""Recipe / pantry match scoring.

Ranks recipes by the share of their distinct ingredients present in the
pantry. Presence only: quantities are not compared.
"""
import math
from typing import Iterable, List

from cookwise.domain.Recipe import Recipe

__all__ = ["score_recipe", "score_recipe_matches", "round_half_up"]


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def score_recipe(pantry_ingredient_ids: set, recipe: Recipe) -> dict:
    """Score one recipe. A recipe without ingredients scores 0."""
    matching: List[str] = []
    missing: List[str] = []
    seen = set()
    for line in recipe.ingredients:
        if line.ingredient_id in seen:
            continue
        seen.add(line.ingredient_id)
        if line.ingredient_id in pantry_ingredient_ids:
            matching.append(line.ingredient.name)
        else:
            missing.append(line.ingredient.name)
    total = len(seen)
    percentage = round_half_up(100 * len(matching) / total) if total else 0
    return {
        'recipe': recipe,
        'match_percentage': percentage,
        'matching_ingredients': matching,
        'missing_ingredients': missing,
    }


def score_recipe_matches(pantry_ingredient_ids: Iterable[str], recipes: Iterable[Recipe]) -> List[dict]:
    """Score every recipe and sort by match_percentage, highest first.

    The sort is stable: recipes with equal percentages keep their input order.
    """
    ids = set(pantry_ingredient_ids)
    results = [score_recipe(ids, recipe) for recipe in recipes]
    results.sort(key=lambda r: r['match_percentage'], reverse=True)
    return results
