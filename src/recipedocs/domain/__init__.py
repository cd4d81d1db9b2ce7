from .models import CategoryDescriptor, RecipeDescriptor, RecipeOption, RecipeOrigin

__all__ = [
    "CategoryDescriptor",
    "RecipeDescriptor",
    "RecipeOption",
    "RecipeOrigin",
]
