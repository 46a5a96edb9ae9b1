"""Catalog domain exceptions."""


class CatalogError(Exception):
    """Base class for catalog errors."""


class CategoryInUseError(CatalogError):
    """Category still has products or subcategories."""


class CircularCategoryError(CatalogError):
    """Parent assignment would create a cycle in the category tree."""


class CsvImportError(CatalogError):
    """The uploaded CSV cannot be imported at all."""


class CsvRowError(CatalogError):
    """A single CSV row is invalid."""
