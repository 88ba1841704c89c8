from .loader import WORK_DIR_ENV, Project, load_project, parse_project_dict
from .schema import PROJECT_SCHEMA, validate_project_dict

__all__ = [
    "WORK_DIR_ENV",
    "Project",
    "load_project",
    "parse_project_dict",
    "PROJECT_SCHEMA",
    "validate_project_dict",
]
