"""Ingredient requirement aggregation.

Provides aggregate_requirements(meal_plans): total quantity needed per
(ingredient, unit) for a set of planned meals, scaled by each plan's serving
ratio.
"""
from typing import Dict, Iterable, List, Tuple

from cookwise.domain.errors import InputViolation
from cookwise.domain.Plan import MealPlan

RequirementKey = Tuple[str, str]


def serving_ratio(plan: MealPlan) -> float:
    """Planned servings over the recipe's default servings (unset or 0 counts as 4)."""
    return plan.servings / plan.recipe.effective_servings


def validate_meal_plans(meal_plans: Iterable[MealPlan]) -> List[MealPlan]:
    """Reject non-positive plan servings and negative recipe servings or quantities."""
    plans = list(meal_plans)
    for plan in plans:
        if plan.servings is None or plan.servings <= 0:
            raise InputViolation(f"Meal plan {plan.id} has non-positive servings: {plan.servings}")
        if plan.recipe.servings is not None and plan.recipe.servings < 0:
            raise InputViolation(f"Recipe '{plan.recipe.title}' has negative servings: {plan.recipe.servings}")
        for line in plan.recipe.ingredients:
            if line.quantity is None or line.quantity < 0:
                raise InputViolation(
                    f"Recipe '{plan.recipe.title}' has a negative quantity for {line.ingredient.name}: {line.quantity}"
                )
    return plans


def aggregate_requirements(meal_plans: Iterable[MealPlan]) -> Dict[RequirementKey, dict]:
    """Compute the total quantity needed per ingredient line.

    Args:
        meal_plans: MealPlan entries with resolved Recipe / RecipeIngredient / Ingredient.

    Returns:
        Dict keyed by (ingredient_id, unit) in first-appearance order, values
        { ingredient_id, name, quantity, unit, category }. Quantities are not rounded.

    The same ingredient requested in two different units yields two lines;
    units are never converted or summed here.
    """
    requirements: Dict[RequirementKey, dict] = {}
    for plan in validate_meal_plans(meal_plans):
        ratio = serving_ratio(plan)
        for line in plan.recipe.ingredients:
            key = (line.ingredient_id, line.unit)
            entry = requirements.get(key)
            if entry is None:
                entry = requirements[key] = {
                    'ingredient_id': line.ingredient_id,
                    'name': line.ingredient.name,
                    'quantity': 0,
                    'unit': line.unit,
                    'category': line.ingredient.category,
                }
            entry['quantity'] += line.quantity * ratio
    return requirements


__all__ = ['aggregate_requirements', 'serving_ratio', 'validate_meal_plans']
