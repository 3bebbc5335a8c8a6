"""In-process category cache backed by a CategoryRepository."""

import logging

from tasktree.core.errors import error_message
from tasktree.core.logging import span
from tasktree.core.observable import StateHolder
from tasktree.domain.cache_state import CategoryCacheState
from tasktree.domain.category import Category
from tasktree.domain.create_models import CreateCategoryInput
from tasktree.domain.update_models import UpdateCategoryInput
from tasktree.services.repositories import CategoryRepository


logger = logging.getLogger(__name__)


def _by_name(categories: list[Category]) -> tuple[Category, ...]:
    return tuple(sorted(categories, key=lambda category: category.name.casefold()))


class CategoryCache(StateHolder[CategoryCacheState]):
    """Local copy of the category list, kept sorted by name after edits."""

    def __init__(self, repository: CategoryRepository) -> None:
        """Initialize an empty cache."""
        super().__init__(CategoryCacheState())
        self._repository = repository

    def _update(self, **changes: object) -> None:
        self._set_state(self.state.model_copy(update=changes))

    def get(self, category_id: int | None) -> Category | None:
        """Return the cached category with ``category_id``, if any."""
        if category_id is None:
            return None
        return next((c for c in self.state.categories if c.id == category_id), None)

    async def load(self) -> None:
        """Replace the cached list. Failures are recorded in ``state.error``."""
        with span("category_cache.load"):
            self._update(loading=True)
            try:
                categories = await self._repository.get_all_categories()
            except Exception as e:
                message = error_message(e, "Failed to load categories")
                logger.error("Failed to load categories", extra={"error": message})
                self._update(loading=False, error=message)
                return

            self._update(categories=tuple(categories), loading=False, error=None)
            logger.info("Loaded categories", extra={"categories": len(categories)})

    async def create_category(self, data: CreateCategoryInput) -> Category:
        """Create a category and insert it in name order.

        Raises:
            RepositoryError: If the repository rejects the create
        """
        with span("category_cache.create_category"):
            try:
                category = await self._repository.create_category(data)
            except Exception as e:
                logger.error("Failed to create category", extra={"error": error_message(e, "unknown")})
                raise

            self._update(categories=_by_name([*self.state.categories, category]))
            return category

    async def update_category(self, category_id: int, data: UpdateCategoryInput) -> Category:
        """Patch a category and re-sort the list.

        Raises:
            RepositoryError: If the repository rejects the update
        """
        with span("category_cache.update_category"):
            try:
                updated = await self._repository.update_category(category_id, data)
            except Exception as e:
                logger.error(
                    "Failed to update category",
                    extra={"category_id": category_id, "error": error_message(e, "unknown")},
                )
                raise

            self._update(
                categories=_by_name([updated if c.id == category_id else c for c in self.state.categories]),
            )
            return updated

    async def delete_category(self, category_id: int) -> None:
        """Delete a category and drop it from the list.

        Raises:
            RepositoryError: If the repository rejects the delete
        """
        with span("category_cache.delete_category"):
            try:
                await self._repository.delete_category(category_id)
            except Exception as e:
                logger.error(
                    "Failed to delete category",
                    extra={"category_id": category_id, "error": error_message(e, "unknown")},
                )
                raise

            self._update(categories=tuple(c for c in self.state.categories if c.id != category_id))
