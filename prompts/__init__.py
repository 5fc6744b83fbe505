"""
Prompt template system for Bending Chronicles.

Jinja2-based templates for every line the console shows: setup questions,
per-turn prompts, and the text describing engine reports.
"""

from pathlib import Path
from typing import Dict, Any, Optional
from jinja2 import Environment, ChoiceLoader, DictLoader, FileSystemLoader, Template
from jinja2.exceptions import TemplateNotFound


class PromptEngine:
    """
    Jinja2-based prompt template engine.

    Built-in templates live in DEFAULT_TEMPLATES. An optional template
    directory is searched first, so individual lines can be overridden
    without touching code.
    """

    def __init__(self, template_dir: Optional[Path] = None):
        self.template_dir = template_dir

        loaders = [DictLoader(DEFAULT_TEMPLATES)]
        if self.template_dir is not None and Path(self.template_dir).is_dir():
            loaders.insert(0, FileSystemLoader(str(self.template_dir)))

        self.env = Environment(
            loader=ChoiceLoader(loaders),
            trim_blocks=True,
            lstrip_blocks=True,
            autoescape=False,
        )

        # Register custom filters
        self.env.filters['signed'] = self._format_signed

    def _format_signed(self, value) -> str:
        """Format a delta with an explicit sign: +10, -5, +0."""
        try:
            return f"{int(value):+d}"
        except (ValueError, TypeError):
            return str(value)

    def load_template(self, template_name: str) -> Optional[Template]:
        """Load a template by name, trying a .j2 suffix as well."""
        try:
            return self.env.get_template(template_name)
        except TemplateNotFound:
            try:
                return self.env.get_template(f"{template_name}.j2")
            except TemplateNotFound:
                return None

    def render(self, template_name: str, context: Optional[Dict[str, Any]] = None) -> str:
        """Render a template with context."""
        template = self.load_template(template_name)
        if template is None:
            return f"[Template '{template_name}' not found]"
        return template.render(**(context or {}))


# =============================================================================
# BUILT-IN TEMPLATES
# =============================================================================

DEFAULT_TEMPLATES = {
    # Character creation
    'setup/name.txt': "Enter character name:",
    'setup/nation.txt': "Select nation ({{ nations | join(', ') }}):",
    'setup/bending.txt': "Select bending type:",
    'setup/invalid_bending.txt': "Invalid bending type. Default bending strategy will be used.",

    'character/info.txt': '''==== Character Info ====
Name: {{ name }}
Nation: {{ nation }}
Bending Type: {{ bending_type }}
Power Points: {{ power_points }}
========================''',

    # Turn phases
    'turn/event.txt': '''Event: {{ description }}
Event observed: {{ description }}
Power points updated based on the event. ({{ delta | signed }}, now {{ power_after }})''',

    'turn/spirit_prompt.txt': "Do you want to connect with spirits through the avatar? (yes/no)",

    'turn/spirit_result.txt': '''Connecting with Spirits through the Avatar!
Spirit connection applied.
Power points modified by: {{ modifier }}''',

    'turn/battle_prompt.txt': "Do you want to engage in a battle? (yes/no)",
    'turn/opponent_prompt.txt': "Choose your opponent ({{ opponent_types | join(', ') }}):",

    # Battles
    'battle/result.txt': '''Battle between {{ player_name }} and {{ opponent_name }}!
Battle Result:
{{ player_name }} Power Points: {{ player_power }}
{{ opponent_name }} Power Points: {{ opponent_power }}
{{ "It's a tie!" if outcome == 'tie' else winner ~ ' wins!' }}''',

    'battle/declined.txt': "You decided not to engage in a battle.",

    # Session end
    'session/farewell.txt': "{{ name }} steps away from the spirit world. Final power points: {{ power_points }}.",
}


# Shared prompt engine instance
_engine: Optional[PromptEngine] = None


def get_prompt_engine() -> PromptEngine:
    """Get or create the shared prompt engine."""
    global _engine
    if _engine is None:
        _engine = PromptEngine()
    return _engine


def render_template(template_name: str, context: Optional[Dict[str, Any]] = None) -> str:
    """Convenience function to render a template."""
    return get_prompt_engine().render(template_name, context)
