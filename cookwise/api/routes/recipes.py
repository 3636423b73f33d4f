from fastapi import APIRouter, Depends

from cookwise.api.deps import get_household, get_store
from cookwise.infra.Pantry_Repository import PantryRepository
from cookwise.infra.Recipe_Repository import RecipeRepository
from cookwise.infra.store import JsonStore
from cookwise.logic.matching.scorer import score_recipe_matches
from cookwise.utilities.validators import RecipeInput

router = APIRouter(prefix="/api/recipes", tags=["recipes"])


@router.get("")
def list_recipes(household_id: str = Depends(get_household), store: JsonStore = Depends(get_store)):
    recipes = RecipeRepository(store).list(household_id)
    return {"count": len(recipes), "recipes": [r.api_dict() for r in recipes]}


@router.post("", status_code=201)
def create_recipe(payload: RecipeInput, household_id: str = Depends(get_household),
                  store: JsonStore = Depends(get_store)):
    recipe = RecipeRepository(store).create(
        title=payload.title,
        ingredients=[line.model_dump() for line in payload.ingredients],
        servings=payload.servings,
        steps=payload.steps,
        description=payload.description,
        prep_time=payload.prep_time,
        cook_time=payload.cook_time,
        household_id=household_id,
    )
    return recipe.api_dict()


@router.get("/matches")
def recipe_matches(household_id: str = Depends(get_household), store: JsonStore = Depends(get_store)):
    """Household recipes ranked by the share of their ingredients already in the pantry.

    Response JSON structure:
        { "count": int, "matches": [ { recipe: {id, title, servings}, match_percentage,
                                       matching_ingredients, missing_ingredients } ] }
    """
    pantry_ids = PantryRepository(store).get_pantry(household_id).ingredient_ids()
    recipes = RecipeRepository(store).list(household_id)
    matches = score_recipe_matches(pantry_ids, recipes)
    return {
        "count": len(matches),
        "matches": [
            {
                **m,
                "recipe": {"id": m["recipe"].id, "title": m["recipe"].title, "servings": m["recipe"].servings},
            }
            for m in matches
        ],
    }


@router.get("/{recipe_id}")
def get_recipe(recipe_id: str, household_id: str = Depends(get_household), store: JsonStore = Depends(get_store)):
    return RecipeRepository(store).get(recipe_id, household_id).api_dict()


@router.delete("/{recipe_id}", status_code=204)
def delete_recipe(recipe_id: str, household_id: str = Depends(get_household),
                  store: JsonStore = Depends(get_store)):
    RecipeRepository(store).delete(recipe_id, household_id)
