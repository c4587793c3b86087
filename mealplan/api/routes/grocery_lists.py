from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Request, Response

from mealplan.domain.DateRange import DateRange
from mealplan.infra.pdf_utils import generate_pdf_for_grocery_list
from mealplan.logic.shopping.list_helpers import (
    count_recipe_meals_in_range, create_manual_item, get_most_recent_list, get_quick_date_range,
    get_sorted_categories, group_items_by_category, separate_checked_items
)
from mealplan.logic.units.formatting import format_quantity
from mealplan.utilities.validators import GroceryItemUpdateInput, GroceryListRequest, ManualItemInput

router = APIRouter(prefix="/api/grocery-lists", tags=["grocery-lists"])


def _service(request: Request):
    return request.app.state.grocery_service


def _item_view(item):
    data = item.to_dict()
    data["display"] = f"{format_quantity(item.quantity)} {item.unit}"
    return data


def _result_view(result):
    return {
        "list": result.grocery_list.to_dict(),
        "items": [_item_view(i) for i in result.items],
        "count": len(result.items),
        "unresolved": [u.to_dict() for u in result.unresolved],
    }


def _get_list_or_404(request: Request, list_id: str):
    grocery_list = _service(request).grocery_lists.get(list_id)
    if grocery_list is None:
        raise HTTPException(status_code=404, detail=f"Grocery list '{list_id}' not found")
    return grocery_list


@router.get("/quick-range")
def quick_range(days: Optional[int] = Query(default=None, ge=1)):
    """Default generation range: today plus the following days."""
    date_range = get_quick_date_range(days) if days else get_quick_date_range()
    return date_range.to_dict()


@router.post("/preview")
def preview_grocery_list(payload: GroceryListRequest, request: Request):
    date_range = DateRange(payload.start, payload.end)
    service = _service(request)
    view = _result_view(service.preview(date_range, payload.name))
    view["recipeMeals"] = count_recipe_meals_in_range(service.meal_plans.get_all_in_range(date_range), date_range)
    return view


@router.post("/", status_code=201)
def generate_grocery_list(payload: GroceryListRequest, request: Request):
    result = _service(request).generate(DateRange(payload.start, payload.end), payload.name)
    return _result_view(result)


@router.get("/")
def list_grocery_lists(request: Request):
    lists = sorted(_service(request).grocery_lists.get_all(), key=lambda gl: gl.created_at, reverse=True)
    return {"count": len(lists), "lists": [gl.to_dict() for gl in lists]}


@router.get("/latest")
def latest_grocery_list(request: Request):
    grocery_list = get_most_recent_list(_service(request).grocery_lists.get_all())
    if grocery_list is None:
        raise HTTPException(status_code=404, detail="No grocery lists yet")
    return grocery_list.to_dict()


@router.get("/{list_id}")
def get_grocery_list(list_id: str, request: Request):
    grocery_list = _get_list_or_404(request, list_id)
    items = _service(request).grocery_lists.get_items(list_id)
    checked, unchecked = separate_checked_items(items)
    grouped = group_items_by_category(unchecked)
    return {
        "list": grocery_list.to_dict(),
        "categories": [
            {"category": c, "items": [_item_view(i) for i in grouped[c]]}
            for c in get_sorted_categories(grouped)
        ],
        "checked": [_item_view(i) for i in checked],
        "count": len(items),
    }


@router.get("/{list_id}/pdf")
def grocery_list_pdf(list_id: str, request: Request):
    grocery_list = _get_list_or_404(request, list_id)
    items = _service(request).grocery_lists.get_items(list_id)
    pdf = generate_pdf_for_grocery_list(grocery_list, items)
    return Response(content=pdf, media_type="application/pdf",
                    headers={"Content-Disposition": f'attachment; filename="grocery_list_{list_id}.pdf"'})


@router.post("/{list_id}/items", status_code=201)
def add_manual_item(list_id: str, payload: ManualItemInput, request: Request):
    _get_list_or_404(request, list_id)
    item = create_manual_item(list_id, payload.name, payload.quantity, payload.unit, payload.category)
    _service(request).grocery_lists.add_item(item)
    return _item_view(item)


@router.patch("/{list_id}/items/{item_id}")
def update_item(list_id: str, item_id: str, payload: GroceryItemUpdateInput, request: Request):
    _get_list_or_404(request, list_id)
    if not any(i.id == item_id for i in _service(request).grocery_lists.get_items(list_id)):
        raise HTTPException(status_code=404, detail=f"Grocery item '{item_id}' not found in list '{list_id}'")
    updates = payload.model_dump(exclude_none=True)
    if not updates:
        raise HTTPException(status_code=400, detail="Nothing to update")
    item = _service(request).grocery_lists.update_item(item_id, **updates)
    return _item_view(item)


@router.delete("/{list_id}")
def delete_grocery_list(list_id: str, request: Request):
    if not _service(request).grocery_lists.delete_list(list_id):
        raise HTTPException(status_code=404, detail=f"Grocery list '{list_id}' not found")
    return {"status": "ok", "deleted": list_id}
