from inventory_app.errors import BusinessRuleError, NotFoundError, ValidationError
from inventory_app.models.category import Category
from inventory_app.repositories.category_repo import CategoryRepo


class CategoryService:
    @staticmethod
    def list_categories():
        return CategoryRepo.list_all()

    @staticmethod
    def get_category(category_id: int):
        category = CategoryRepo.get(category_id)
        if not category:
            raise NotFoundError("Category not found")
        return category

    @staticmethod
    def _ensure_unique(name: str, exclude_id: int | None = None):
        if CategoryRepo.name_taken(name, exclude_id=exclude_id):
            raise ValidationError("The given data was invalid.",
                                  errors={"name": "The name has already been taken."})

    @staticmethod
    def create_category(name: str, description: str | None = None):
        CategoryService._ensure_unique(name)
        return CategoryRepo.create(Category(name=name, description=description))

    @staticmethod
    def update_category(category_id: int, name: str, description: str | None = None):
        category = CategoryService.get_category(category_id)
        CategoryService._ensure_unique(name, exclude_id=category.id)

        category.name = name
        category.description = description
        CategoryRepo.update()
        return category

    @staticmethod
    def delete_category(category_id: int):
        category = CategoryService.get_category(category_id)
        if CategoryRepo.count_items(category.id) > 0:
            raise BusinessRuleError("Cannot delete category with associated items")
        CategoryRepo.delete(category)
