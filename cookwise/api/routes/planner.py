from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from cookwise.api.deps import get_household, get_store
from cookwise.infra.pdf_utils import generate_pdf_for_week
from cookwise.infra.Plan_Repository import PlanRepository
from cookwise.infra.store import JsonStore
from cookwise.utilities.validators import MealSlotInput

router = APIRouter(prefix="/api/plan", tags=["planner"])


@router.get("/week")
def get_week(day: Optional[date] = Query(default=None), household_id: str = Depends(get_household),
             store: JsonStore = Depends(get_store)):
    return PlanRepository(store).get_week(household_id, day).to_dict()


@router.post("/slot", status_code=201)
def assign_slot(payload: MealSlotInput, household_id: str = Depends(get_household),
                store: JsonStore = Depends(get_store)):
    plan = PlanRepository(store).assign_slot(
        household_id, payload.day, payload.meal_type, payload.recipe_id, payload.servings
    )
    return plan.api_dict()


@router.delete("/{plan_id}", status_code=204)
def remove_meal(plan_id: str, household_id: str = Depends(get_household), store: JsonStore = Depends(get_store)):
    PlanRepository(store).remove(household_id, plan_id)


@router.get("/week/pdf")
def export_week_pdf(day: Optional[date] = Query(default=None), household_id: str = Depends(get_household),
                    store: JsonStore = Depends(get_store)):
    week_plan = PlanRepository(store).get_week(household_id, day)
    pdf_bytes = generate_pdf_for_week(week_plan)
    filename = f"meal_plan_{week_plan.year}_W{week_plan.week:02d}.pdf"
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
