"""
Prompt loader utility for Math 6 Master.

Loads YAML prompt templates shipped in the mathmaster/prompts/ directory.
"""

from pathlib import Path
from typing import Any

import yaml


PROMPTS_DIR = Path(__file__).parent.parent / "prompts"
REQUIRED_KEYS = ("system", "user_template")


def load_prompt(name: str, prompts_dir: Path | None = None) -> dict[str, Any]:
    """
    Load a prompt template by name.

    Args:
        name: Prompt name without .yaml extension (e.g., "quiz_generation")
        prompts_dir: Optional custom prompts directory

    Returns:
        Dict containing the parsed YAML prompt template with keys:
        - meta: version, temperature, response_mime_type
        - system: system instruction string
        - user_template: user prompt template with {placeholders}

    Raises:
        FileNotFoundError: If prompt file doesn't exist
        ValueError: If the template lacks system or user_template
        yaml.YAMLError: If YAML parsing fails
    """
    dir_path = prompts_dir or PROMPTS_DIR
    file_path = dir_path / f"{name}.yaml"

    if not file_path.exists():
        raise FileNotFoundError(f"Prompt template not found: {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        prompt = yaml.safe_load(f) or {}

    missing = [key for key in REQUIRED_KEYS if key not in prompt]
    if missing:
        raise ValueError(f"Prompt template {name} is missing: {', '.join(missing)}")
    return prompt


def format_prompt(template: str, **kwargs) -> str:
    """Substitute {placeholders} in a prompt template."""
    return template.format(**kwargs)


def get_available_prompts(prompts_dir: Path | None = None) -> list[str]:
    """List prompt template names (without .yaml extension)."""
    dir_path = prompts_dir or PROMPTS_DIR
    if not dir_path.exists():
        return []
    return sorted(p.stem for p in dir_path.glob("*.yaml"))
