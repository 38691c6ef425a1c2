from .config import dump_settings, load_settings
from .exceptions import (
    AttributeImportError,
    NameConflictError,
    OverwriteConflictError,
    SettingsLoadError,
)
from .importer import AttributeImporter, import_attributes
from .mixins import Construction, Instantiation, PreInit
from .settings import NameErrorAction, Settings

__version__ = "0.1.0"

__all__ = [
    "AttributeImporter",
    "AttributeImportError",
    "Construction",
    "Instantiation",
    "NameConflictError",
    "NameErrorAction",
    "OverwriteConflictError",
    "PreInit",
    "Settings",
    "SettingsLoadError",
    "dump_settings",
    "import_attributes",
    "load_settings",
]
