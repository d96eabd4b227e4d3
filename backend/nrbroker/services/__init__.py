from .build_logger import BuildLogger
from .file_util import FileUtil
from .property_handler import PropertyHandler, MappingPropertyHandler

__all__ = [
    "BuildLogger",
    "FileUtil",
    "PropertyHandler",
    "MappingPropertyHandler",
]
