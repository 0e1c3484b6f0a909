from reordinator.infrastructure.document_io import (
    read_lines,
    temp_path_for,
    load_document,
    save_document,
    save_document_as,
)
from reordinator.infrastructure.resources import (
    BUNDLE_NAME,
    SYSTEM_BUNDLE_DIR,
    bundle_candidates,
    locate_bundle,
    load_bundle,
)

__all__ = [
    "read_lines",
    "temp_path_for",
    "load_document",
    "save_document",
    "save_document_as",
    "BUNDLE_NAME",
    "SYSTEM_BUNDLE_DIR",
    "bundle_candidates",
    "locate_bundle",
    "load_bundle",
]
