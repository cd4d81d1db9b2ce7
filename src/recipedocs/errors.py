class RecipeDocsError(Exception):
    pass


class ConfigError(RecipeDocsError):
    pass


class CoordinateError(ConfigError):
    pass


class DescriptorError(RecipeDocsError):
    pass


class UnresolvedOriginError(RecipeDocsError):
    def __init__(self, recipe_name: str, source: str) -> None:
        super().__init__(f"Could not find GAV coordinates of recipe {recipe_name} from {source}")
        self.recipe_name = recipe_name
        self.source = source


class RecipeNameError(RecipeDocsError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Recipe package unrecognized: {name}")
        self.name = name


class OutputError(RecipeDocsError):
    pass
