"""
Prompt Builder - Jinja2 templates for every AI action
"""

from pathlib import Path
from typing import Optional, Tuple
from jinja2 import Environment, FileSystemLoader, select_autoescape


# Actions whose output is machine-read JSON: sent without the assistant persona
STRUCTURED_ACTIONS = {"extract_terms", "parse_equation"}

# Excerpt of the AI response shown to the concept extractor
CONCEPT_RESPONSE_CHARS = 500


class PromptBuilder:
    """
    Builds provider-neutral prompts from Jinja2 templates.

    Every provider receives the same (system_prompt, user_message) pair and
    only decides how to put it on the wire.
    """

    def __init__(self):
        templates_dir = Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(templates_dir),
            autoescape=select_autoescape(['html', 'xml']),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=False,
        )

    def _render(self, template_name: str, **kwargs) -> str:
        return self.env.get_template(template_name).render(**kwargs).strip()

    def build_system_prompt(self) -> str:
        return self._render("system.jinja2")

    def build(
        self,
        text: str,
        context: Optional[str] = None,
        action: str = "explain",
    ) -> Tuple[Optional[str], str]:
        """
        Build the prompt pair for an action.

        Args:
            text: Selected text
            context: Surrounding page text (optional)
            action: explain, summarize, define, explain_fundamental,
                extract_terms or parse_equation (unknown actions fall back to explain)

        Returns:
            (system_prompt, user_message); system_prompt is None for structured actions
        """
        template = f"{action}.jinja2"
        if action not in self.available_actions():
            template = "explain.jinja2"

        user_message = self._render(template, text=text, context=context)
        if action in STRUCTURED_ACTIONS:
            return None, user_message
        return self.build_system_prompt(), user_message

    def build_concept_extraction(self, text: str, response: str) -> str:
        return self._render(
            "extract_concepts.jinja2",
            text=text,
            response=response[:CONCEPT_RESPONSE_CHARS],
        )

    def build_review_question(self, text: str, action_type: str, filename: Optional[str] = None) -> str:
        return self._render(
            "review_question.jinja2",
            text=text,
            action_type=action_type,
            filename=filename,
        )

    @staticmethod
    def available_actions() -> Tuple[str, ...]:
        return ("explain", "summarize", "define", "explain_fundamental", "extract_terms", "parse_equation")
