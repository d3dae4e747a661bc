"""Provider payload normalizers, dispatched by (type, provider)"""

from .registry import NORMALIZERS, TypeTag, normalize, normalize_many, normalizer

# importing the provider modules fills NORMALIZERS
from . import jira, monday, redmine  # noqa: E402,F401

__all__ = ["NORMALIZERS", "TypeTag", "normalize", "normalize_many", "normalizer"]
