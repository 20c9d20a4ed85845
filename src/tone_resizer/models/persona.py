"""Persona attributes folded into the tone descriptor sent with each rewrite."""

from __future__ import annotations

from pydantic import BaseModel, Field


class Persona(BaseModel):
    style: str = "clear"
    formality: str = "moderate"
    context: str = "business"
    traits: list[str] = Field(default_factory=lambda: ["clarity"])

    def tone_descriptor(self, tone: str) -> str:
        """Compose the single tone string the enhancer embeds verbatim."""
        descriptor = (
            f"{tone} with {self.style} style, {self.formality} formality, "
            f"in a {self.context} context"
        )
        if self.traits:
            descriptor += f", emphasizing {', '.join(self.traits)}"
        return descriptor
