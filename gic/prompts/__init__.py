"""Prompt Construction Package"""

from gic.prompts.budget import PromptBudget, DiffSelection, DiffSelector, SUMMARY_HEADER, DETAIL_HEADER
from gic.prompts.builder import PromptBuilder, SMART_DIFF_NOTE

__all__ = [
    "PromptBudget",
    "DiffSelection",
    "DiffSelector",
    "PromptBuilder",
    "SUMMARY_HEADER",
    "DETAIL_HEADER",
    "SMART_DIFF_NOTE",
]
