"""
Prompt System for Synapse Reader

Jinja2 templates for reader actions, concept extraction and review cards.
"""

from synapse_reader.prompts.base import PromptBuilder

__all__ = ["PromptBuilder"]
