"""Prompt text for code generation.

Everything here is a pure function of (framework, features): the same inputs
always give the same prompt.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Optional, Tuple

from images import InlineImage
from models import Feature, Framework

PREAMBLE = "You are an expert frontend developer. Convert the provided UI design to clean, production-ready code."

FRAMEWORK_INSTRUCTIONS = MappingProxyType({
    Framework.HTML: "Generate clean, semantic HTML and CSS. Use modern CSS with Flexbox/Grid. Make it responsive and accessible.",
    Framework.TAILWIND: "Generate HTML with Tailwind CSS classes. Make it responsive and use proper Tailwind utility classes. Include the necessary Tailwind CSS CDN link in the head.",
    Framework.REACT: "Generate a React functional component with JSX named App. Use modern React practices and functional components. Include any necessary imports.",
    Framework.VUE: "Generate a Vue single-file component with template, script, and style sections.",
})

FEATURE_INSTRUCTIONS = MappingProxyType({
    Feature.RESPONSIVE: "Ensure the design is fully responsive and works on mobile, tablet, and desktop.",
    Feature.ACCESSIBLE: "Include proper ARIA labels, semantic HTML, and accessibility features.",
    Feature.INTERACTIVE: "Add appropriate hover states, focus states, and interactive elements where needed.",
    Feature.MODERN: "Use modern CSS features like Flexbox/Grid and best practices.",
})

GUIDELINES = """IMPORTANT GUIDELINES:
1. Use semantic HTML5 elements
2. Make it fully responsive
3. Include proper accessibility attributes
4. Use modern CSS practices (Flexbox/Grid)
5. Add comments for important sections
6. Ensure cross-browser compatibility
7. Create pixel-perfect code that matches the design exactly: colors, spacing, and typography
8. Export complete, runnable code
9. If using Tailwind, include the CDN link: <script src="https://cdn.tailwindcss.com"></script>
10. Return only the code. No markdown formatting, no code fences, no explanations."""

USER_INSTRUCTION = (
    "Convert this UI design to clean, production-ready code. Pay close attention to layout, "
    "spacing, colors, typography, and all visual details. Make it exactly like the image."
)

FRAMEWORK_LABELS = MappingProxyType({
    Framework.HTML: "HTML/CSS",
    Framework.TAILWIND: "Tailwind CSS",
    Framework.REACT: "React",
    Framework.VUE: "Vue",
})

TEXT_ONLY_NOTE = """NOTE: The design image could not be processed for this request.
Without the image, build a generic, polished {label} component instead (for example a sign-in card
with a heading, email and password fields, and a primary button) that follows every instruction above."""


@dataclass(frozen=True)
class PromptSpec:
    framework: Framework
    framework_instruction: str
    feature_instructions: Tuple[str, ...]
    image: Optional[InlineImage] = None

    @property
    def text(self) -> str:
        return "\n\n".join([
            PREAMBLE,
            self.framework_instruction,
            " ".join(self.feature_instructions),
            GUIDELINES,
        ])

    def text_only(self) -> str:
        """Prompt for the degraded call made when the model can't take the image."""
        label = FRAMEWORK_LABELS[self.framework]
        return self.text + "\n\n" + TEXT_ONLY_NOTE.format(label=label)


def build_prompt(framework, features=(), image: InlineImage = None) -> PromptSpec:
    framework = Framework.parse(framework)
    return PromptSpec(
        framework=framework,
        framework_instruction=FRAMEWORK_INSTRUCTIONS[framework],
        feature_instructions=tuple(FEATURE_INSTRUCTIONS[f] for f in Feature.parse_many(features)),
        image=image,
    )
