"""
SKILL.md templates for scaffolding new skills.

Template kinds:
- basic: plain instructions skill
- forked: runs in a forked context (`context: fork`)
- agent: forked context delegated to a subagent (`agent:`, optional `model:`)
- with-hooks: basic skill with an example `hooks:` block
"""

from __future__ import annotations

import dataclasses as _dataclasses
import typing as _typing

import yaml as _yaml

TemplateType = _typing.Literal["basic", "forked", "agent", "with-hooks"]

TEMPLATE_TYPES: tuple[str, ...] = ("basic", "forked", "agent", "with-hooks")
MEMORY_SCOPES: tuple[str, ...] = ("user", "project", "local")
AGENT_MODELS: tuple[str, ...] = ("inherit", "sonnet", "opus", "haiku")

DEFAULT_AGENT = "general-purpose"

# Directories created next to SKILL.md unless minimal output is requested
RESOURCE_DIRS: tuple[str, ...] = ("scripts", "references", "assets")


@_dataclasses.dataclass
class TemplateOptions:
    """Optional refinements applied when scaffolding a skill."""

    template_type: str = "basic"
    minimal: bool = False
    memory: str | None = None
    model: str | None = None
    argument_hint: str | None = None


def _title(name: str) -> str:
    return " ".join(part.capitalize() for part in name.split("-"))


def build_frontmatter(
    name: str,
    description: str,
    allowed_tools: _typing.Sequence[str],
    options: TemplateOptions,
) -> dict[str, _typing.Any]:
    """Assemble the header mapping in the order it is written out."""
    data: dict[str, _typing.Any] = {"name": name, "description": description}

    if options.template_type in ("forked", "agent"):
        data["context"] = "fork"
    if options.template_type == "agent":
        data["agent"] = DEFAULT_AGENT
    if options.model:
        data["model"] = options.model
    if options.memory:
        data["memory"] = options.memory
    if options.argument_hint:
        data["argument-hint"] = options.argument_hint
    if allowed_tools:
        data["allowed-tools"] = list(allowed_tools)
    if options.template_type == "with-hooks":
        data["hooks"] = {
            "PreToolUse": [
                {
                    "matcher": "Bash",
                    "hooks": [
                        {"type": "command", "command": "echo 'About to run a command'"},
                    ],
                },
            ],
        }

    return data


def _full_body(name: str, options: TemplateOptions) -> str:
    title = _title(name)
    sections = [
        f"# {title}",
        "",
        "Describe what this skill helps with in one or two sentences.",
        "",
        "## When to Use This Skill",
        "",
        "- Situations where this skill applies",
        "- Phrases or requests that should trigger it",
        "",
        "## Instructions",
        "",
        "1. First step",
        "2. Second step",
        "3. Verify the result",
        "",
    ]
    if options.template_type == "agent":
        sections += [
            "## Agent Task",
            "",
            "This skill runs in a forked subagent. State the task, the inputs it",
            "receives, and exactly what it must report back.",
            "",
        ]
    elif options.template_type == "forked":
        sections += [
            "## Forked Context",
            "",
            "This skill runs in its own context. Summarize results for the main",
            "conversation before finishing.",
            "",
        ]
    elif options.template_type == "with-hooks":
        sections += [
            "## Hooks",
            "",
            "The frontmatter registers an example PreToolUse hook. Replace it with",
            "the checks this skill needs, or remove it.",
            "",
        ]
    if options.argument_hint:
        sections += [
            "## Arguments",
            "",
            f"Invoke with: `{options.argument_hint}`. Arguments arrive as $ARGUMENTS.",
            "",
        ]
    sections += [
        "## Examples",
        "",
        "Show one realistic request and the expected outcome.",
        "",
        "## Resources",
        "",
        "- `scripts/`: executable helpers",
        "- `references/`: documentation loaded on demand",
        "- `assets/`: templates and files used in output",
        "",
    ]
    return "\n".join(sections)


def _minimal_body(name: str) -> str:
    return f"# {_title(name)}\n\n## Instructions\n\n1. First step\n"


def render_skill_md(
    name: str,
    description: str,
    allowed_tools: _typing.Sequence[str] = (),
    options: TemplateOptions | None = None,
) -> str:
    """Render a complete SKILL.md (frontmatter plus body)."""
    options = options or TemplateOptions()
    header = _yaml.safe_dump(
        build_frontmatter(name, description, allowed_tools, options),
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
        width=4096,
    )
    body = _minimal_body(name) if options.minimal else _full_body(name, options)
    return f"---\n{header}---\n\n{body}"
