"""Conversion suggestion planning."""

from .planner import ONE_OFF_TARGETS, SuggestionPlanner, build_suggestion, suggest

__all__ = ["ONE_OFF_TARGETS", "SuggestionPlanner", "build_suggestion", "suggest"]
