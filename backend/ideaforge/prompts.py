"""System instructions and prompt templates for the generation flows."""

from dataclasses import dataclass
from enum import Enum


class DocumentType(str, Enum):
    PRD = "prd"
    SPECS = "specs"
    DESIGN = "design"
    PLANS = "plans"


class MockupStyle(str, Enum):
    WIREFRAME = "wireframe"
    MOCKUP = "mockup"
    LOGO = "logo"
    ASSET = "asset"
    CUSTOM = "custom"


class PresetName(str, Enum):
    DOCUMENT = "document"
    BRAINSTORM = "brainstorm"
    BRAND = "brand"
    CHAT = "chat"


@dataclass(frozen=True)
class Preset:
    """A system instruction plus whether it asks for high reasoning effort."""

    system_instruction: str
    reasoning_effort: bool


BRAINSTORM = Preset(
    system_instruction=(
        "You are a creative brainstorming assistant. Generate 5 unique, innovative, "
        "and actionable ideas based on the user's topic. Format each idea as a short "
        "paragraph with a bold title."
    ),
    reasoning_effort=False,
)

BRAND = Preset(
    system_instruction=(
        "You are an expert UI/UX designer and brand strategist. Generate a comprehensive "
        "brand identity including logos concepts, typography, color palettes (with hex "
        "codes), illustrations style, and abstract visual patterns based on the user's "
        "app idea. Format in Markdown."
    ),
    reasoning_effort=True,
)

CHAT_INSTRUCTION = "You are a helpful AI assistant."


def document(doc_type: DocumentType) -> Preset:
    """Preset for generating a product document of the given type."""
    return Preset(
        system_instruction=(
            "You are an expert product manager and software architect. Generate a "
            f"comprehensive {DocumentType(doc_type).value.upper()} based on the user's idea. "
            "Format the output in Markdown."
        ),
        reasoning_effort=True,
    )


def chat(provider: str) -> Preset:
    # Thinking mode is only switched on for Gemini users
    return Preset(system_instruction=CHAT_INSTRUCTION, reasoning_effort=provider == "gemini")


def resolve_preset(
    name: PresetName,
    provider: str,
    doc_type: DocumentType = DocumentType.PRD,
) -> Preset:
    match PresetName(name):
        case PresetName.DOCUMENT:
            return document(doc_type)
        case PresetName.BRAINSTORM:
            return BRAINSTORM
        case PresetName.BRAND:
            return BRAND
        case PresetName.CHAT:
            return chat(provider)


_MOCKUP_TEMPLATES = {
    MockupStyle.WIREFRAME: (
        "A clean, low-fidelity UI wireframe mockup of {prompt}. Black and white, "
        "simple lines, minimalist, structural layout."
    ),
    MockupStyle.MOCKUP: (
        "A high-fidelity UI mockup of {prompt}. Modern, clean, dribbble style, "
        "beautiful UI/UX, vibrant colors."
    ),
    MockupStyle.LOGO: (
        "A professional, modern logo design for {prompt}. Clean vector style, flat "
        "design, isolated on white background."
    ),
    MockupStyle.ASSET: (
        "A beautiful brand illustration or graphic asset for {prompt}. Modern corporate "
        "memphis or flat vector style, vibrant colors."
    ),
}


def mockup_prompt(style: MockupStyle, prompt: str) -> str:
    """Wrap a prompt in the template for a mockup style. Custom passes through."""
    template = _MOCKUP_TEMPLATES.get(MockupStyle(style))
    if template is None:
        return prompt
    return template.format(prompt=prompt)
