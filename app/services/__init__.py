# app/services - Business logic layer
from .tree_service import TreeService
from .export_service import ExportService
from .insight_service import InsightRequester, get_tree_insights

__all__ = ['TreeService', 'ExportService', 'InsightRequester', 'get_tree_insights']
