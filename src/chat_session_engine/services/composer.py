"""Template-based reply composition.

Replies are built from fixed tables keyed by tone, so the same prompt and
settings always produce byte-identical text.
"""

from typing import Dict, Optional, Sequence

from ..domain.models import MODEL_CATALOG, ModelOption, Settings, Tone

LEAD_LINES: Dict[Tone, str] = {
    Tone.BALANCED: "Here you go with a balanced take:",
    Tone.CONCISE: "Quick answer:",
    Tone.DETAILED: "Here is a detailed walkthrough:",
    Tone.PLAYFUL: "Ooh, fun one!",
}

CLOSING_LINE = "Happy to refine further."
PLAYFUL_CLOSING_LINE = "Want another spin? Just say the word!"


class ResponseComposer:
    """Composes assistant replies for a given model catalog."""

    def __init__(self, catalog: Optional[Sequence[ModelOption]] = None) -> None:
        self._labels: Dict[str, str] = {
            option.id: option.label for option in (catalog or MODEL_CATALOG)
        }

    def model_label(self, model_id: str) -> str:
        # Unknown ids render as-is rather than failing a reply mid-flight
        return self._labels.get(model_id, model_id)

    def compose(self, prompt: str, settings: Settings) -> str:
        """Build the reply text for ``prompt`` under ``settings``."""
        tone = settings.tone
        bullets = "\n".join(
            [
                f"- Model: {self.model_label(settings.model)}",
                f"- Tone: {tone.value}",
                "- Composed locally from canned templates",
            ]
        )
        closing = PLAYFUL_CLOSING_LINE if tone is Tone.PLAYFUL else CLOSING_LINE
        return f"{LEAD_LINES[tone]} {prompt}\n\n{bullets}\n\n{closing}"


_default_composer = ResponseComposer()


def compose(prompt: str, settings: Settings) -> str:
    """Compose a reply against the default model catalog."""
    return _default_composer.compose(prompt, settings)
