"""Sub-recipe graph analysis.

Edges point from a recipe to each recipe it uses as a sub-recipe. The graph is
kept acyclic at write time using would_create_circular / get_excluded_recipe_ids;
get_recipe_depth is a nesting heuristic for warnings, capped at max_depth.
"""
from typing import Dict, Iterable, List, Optional, Set

from mealplan.domain.Recipe import Recipe
from mealplan.utilities.config import MAX_RECIPE_NESTING_DEPTH

__all__ = [
    "build_sub_recipe_index", "would_create_circular", "get_excluded_recipe_ids",
    "get_recipe_depth", "find_cycles",
]

SubRecipeIndex = Dict[str, List[str]]


def build_sub_recipe_index(recipes: Iterable[Recipe]) -> SubRecipeIndex:
    """Adjacency map: recipe id -> ids of its sub-recipes (in declaration order)."""
    return {r.id: r.sub_recipe_ids() for r in recipes}


def _has_path(index: SubRecipeIndex, source_id: str, target_id: str, visited: Set[str]) -> bool:
    if source_id in visited:
        return False
    visited.add(source_id)
    for sub_id in index.get(source_id, []):
        if sub_id == target_id:
            return True
        if _has_path(index, sub_id, target_id, visited):
            return True
    return False


def would_create_circular(recipe_id: str, candidate_id: str, recipes: Iterable[Recipe],
                          index: Optional[SubRecipeIndex] = None) -> bool:
    """True if adding the edge recipe_id -> candidate_id would close a cycle.

    That is the case for a self-reference, or when candidate_id can already
    reach recipe_id through existing sub-recipe edges.
    """
    if recipe_id == candidate_id:
        return True
    if index is None:
        index = build_sub_recipe_index(recipes)
    return _has_path(index, candidate_id, recipe_id, set())


def get_excluded_recipe_ids(recipe_id: str, recipes: Iterable[Recipe]) -> Set[str]:
    """Recipe ids that must not be offered as sub-recipes of recipe_id.

    Always contains recipe_id itself, plus every recipe that already reaches
    recipe_id (nesting it under recipe_id would close a loop).
    """
    recipes = list(recipes)
    index = build_sub_recipe_index(recipes)
    excluded = {recipe_id}
    for recipe in recipes:
        if recipe.id != recipe_id and would_create_circular(recipe_id, recipe.id, recipes, index=index):
            excluded.add(recipe.id)
    return excluded


def _depth(index: SubRecipeIndex, recipe_id: str, visited: Set[str], max_depth: int) -> int:
    if recipe_id in visited or len(visited) >= max_depth:
        return len(visited)
    visited.add(recipe_id)
    sub_ids = index.get(recipe_id, [])
    deepest = len(visited)
    for sub_id in sub_ids:
        # each branch measures its own path
        deepest = max(deepest, _depth(index, sub_id, set(visited), max_depth))
    return deepest


def get_recipe_depth(recipe_id: str, recipes: Iterable[Recipe], max_depth: int = MAX_RECIPE_NESTING_DEPTH) -> int:
    """Number of nodes on the deepest sub-recipe chain from recipe_id, capped at max_depth.

    A recipe without sub-recipes has depth 1.
    """
    return _depth(build_sub_recipe_index(recipes), recipe_id, set(), max_depth)


def find_cycles(recipes: Iterable[Recipe]) -> List[List[str]]:
    """Return the cycles present in a recipe snapshot, each as a closed id path."""
    index = build_sub_recipe_index(recipes)
    cycles: List[List[str]] = []
    seen_cycles: Set[frozenset] = set()
    done: Set[str] = set()

    def visit(node: str, path: List[str], on_path: Set[str]):
        for sub_id in index.get(node, []):
            if sub_id in on_path:
                cycle = path[path.index(sub_id):] + [sub_id]
                key = frozenset(cycle)
                if key not in seen_cycles:
                    seen_cycles.add(key)
                    cycles.append(cycle)
                continue
            if sub_id in done:
                continue
            path.append(sub_id)
            on_path.add(sub_id)
            visit(sub_id, path, on_path)
            on_path.discard(sub_id)
            path.pop()
        done.add(node)

    for start in index:
        if start not in done:
            visit(start, [start], {start})
    return cycles
