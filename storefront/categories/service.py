"""Cas d'usage catégories. Chaque fonction renvoie (status_code, body) pour la vue."""
from typing import Any, Dict, Optional, Tuple
import logging

from storefront.categories import repository
from storefront.utils.slugs import slugify

logger = logging.getLogger(__name__)

Result = Tuple[int, Dict[str, Any]]

def _error(message: str, exc: Exception, status_code: int = 500) -> Result:
    return status_code, {"success": False, "message": message, "error": str(exc)}

def create_category(name: Optional[str]) -> Result:
    if not name:
        return 401, {"message": "Name is required"}
    try:
        if repository.get_category_by_name(name):
            return 200, {"success": False, "message": "Category Already Exists"}
        category = repository.create_category({"name": name, "slug": slugify(name)})
        return 201, {"success": True, "message": "new category created", "category": category}
    except Exception as e:
        logger.exception("Erreur création catégorie name=%s", name)
        return _error("Error in Category", e)

def update_category(category_id: str, name: Optional[str]) -> Result:
    if not name:
        return 401, {"message": "Name is required"}
    try:
        category = repository.update_category(category_id, {"name": name, "slug": slugify(name)})
        return 200, {"success": True, "message": "Category Updated Successfully", "category": category}
    except Exception as e:
        logger.exception("Erreur mise à jour catégorie id=%s", category_id)
        return _error("Error while updating category", e)

def list_categories() -> Result:
    try:
        return 200, {"success": True, "message": "All Categories List", "category": repository.list_categories()}
    except Exception as e:
        logger.exception("Erreur lecture catégories")
        return _error("Error while getting all categories", e)

def get_category(slug: str) -> Result:
    try:
        category = repository.get_category_by_slug(slug)
        return 200, {"success": True, "message": "Get Single Category Successfully", "category": category}
    except Exception as e:
        logger.exception("Erreur lecture catégorie slug=%s", slug)
        return _error("Error While getting Single Category", e)

def delete_category(category_id: str) -> Result:
    try:
        repository.delete_category(category_id)
        return 200, {"success": True, "message": "Category Deleted Successfully"}
    except Exception as e:
        logger.exception("Erreur suppression catégorie id=%s", category_id)
        return _error("Error while deleting category", e)
