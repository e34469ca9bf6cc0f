"""project-guard - tells code generators what already exists in a project."""

__version__ = "1.1.1"

from .analyzer import AnalysisResult, analyze
from .search import SearchResult, search

__all__ = ["AnalysisResult", "SearchResult", "analyze", "search", "__version__"]
