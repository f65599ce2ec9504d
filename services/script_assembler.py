"""
Turn optimized sections into ordered, timed script sections.

Ordering follows the template's precedence rules (highest priority first, any
rule that would close a cycle is dropped), with ties broken by the template's
declared sequence. Narration text is derived from the item payloads and then
run through tone, pacing, technical-level and register passes.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Iterable

from models.audience import (
    AudienceType,
    CommunicationStyle,
    NarrativePacing,
    NarrativeStyle,
    NarrativeTone,
    ScriptAudience,
    TechnicalLevel,
)
from models.content import ContentItem, ContentType
from models.duration import DurationOptimizationResult, OptimizedSection
from models.script import ScriptSection, SectionTransition, TimingWindow, VisualCue
from models.section import SECTION_TITLES, SectionType
from models.template import SectionDefinition, Template, TemplateType
from services.conditions import ConditionContext, all_conditions_hold

logger = logging.getLogger(__name__)

LEAD_INS: dict[SectionType, str] = {
    SectionType.INTRO: "Let's dive into this pull request...",
    SectionType.HOOK: "Here's what makes this change significant...",
    SectionType.OVERVIEW: "Let me walk you through the key aspects...",
    SectionType.PROBLEM_STATEMENT: "The challenge we're addressing is...",
    SectionType.SOLUTION_OVERVIEW: "Here's how we approached the solution...",
    SectionType.TECHNICAL_DETAILS: "Let's examine the technical implementation...",
    SectionType.CODE_CHANGES: "Looking at the code changes...",
    SectionType.FILE_ANALYSIS: "Analyzing the affected files...",
    SectionType.REVIEW_PROCESS: "The review process revealed...",
    SectionType.COLLABORATION: "This was truly a team effort...",
    SectionType.TIMELINE: "The development timeline shows...",
    SectionType.IMPACT_ASSESSMENT: "The impact of these changes...",
    SectionType.KEY_INSIGHTS: "The key takeaways are...",
    SectionType.SUMMARY: "To summarize what we've accomplished...",
    SectionType.CALL_TO_ACTION: "Moving forward, the next steps are...",
    SectionType.OUTRO: "Thanks for joining this code review journey...",
}

CUE_TYPES = {
    "title_sequence": "animation",
    "metrics_dashboard": "chart",
    "code_diff_detailed": "code_highlight",
    "participant_avatars": "avatar",
    "timeline_chart": "chart",
}
DEFAULT_CUE_TYPE = "animation"
CUE_DURATION_SHARE = 0.8

BEGINNER_REPLACEMENTS = {
    "refactored": "improved",
    "implemented": "added",
    "optimized": "made faster",
    "deprecated": "marked as old",
}

TITLE_PREFIXES = {
    AudienceType.EXECUTIVE: "Executive Brief:",
    AudienceType.ENGINEERING: "Technical Review:",
}
DEFAULT_TITLE_PREFIX = "Team Update:"


# -- ordering -----------------------------------------------------------------


def _reaches(edges: dict[SectionType, set[SectionType]], start: SectionType, goal: SectionType) -> bool:
    stack, seen = [start], set()
    while stack:
        node = stack.pop()
        if node is goal:
            return True
        if node in seen:
            continue
        seen.add(node)
        stack.extend(edges.get(node, ()))
    return False


def order_sections(
    present: Iterable[SectionType],
    template: Template | None,
    context: ConditionContext,
) -> list[SectionType]:
    present = list(dict.fromkeys(present))
    declared = template.declared_order() if template else []
    enum_order = list(SectionType)

    def tie_key(section_type: SectionType) -> tuple[int, int]:
        if section_type in declared:
            return (0, declared.index(section_type))
        return (1, enum_order.index(section_type))

    edges: dict[SectionType, set[SectionType]] = {section_type: set() for section_type in present}
    rules = template.ordering_rules if template else ()
    for rule in sorted(rules, key=lambda r: -r.priority):
        if rule.before not in edges or rule.after not in edges or rule.before is rule.after:
            continue
        if not all_conditions_hold(rule.conditions, context):
            continue
        if _reaches(edges, rule.after, rule.before):
            logger.debug(
                "[script_assembler] Skipping ordering %s -> %s (cycle)", rule.before.value, rule.after.value
            )
            continue
        edges[rule.before].add(rule.after)

    indegree = {section_type: 0 for section_type in present}
    for targets in edges.values():
        for target in targets:
            indegree[target] += 1

    ready = sorted((t for t in present if indegree[t] == 0), key=tie_key)
    ordered: list[SectionType] = []
    while ready:
        current = ready.pop(0)
        ordered.append(current)
        for target in edges[current]:
            indegree[target] -= 1
            if indegree[target] == 0:
                ready.append(target)
        ready.sort(key=tie_key)
    return ordered


# -- narration ----------------------------------------------------------------


def apply_tone(text: str, tone: NarrativeTone) -> str:
    if tone is NarrativeTone.ENTHUSIASTIC:
        return text.replace(".", "!").replace("This is", "This is exciting -")
    if tone is NarrativeTone.EDUCATIONAL:
        return re.sub(r"\b(shows|demonstrates|indicates)\b", "teaches us that", text)
    if tone is NarrativeTone.COLLABORATIVE:
        text = re.sub(r"\bThe\b", "Our", text)
        return re.sub(r"\bis\b", "was achieved together", text)
    return text


def apply_pacing(text: str, pacing: NarrativePacing) -> str:
    if pacing is NarrativePacing.SLOW:
        return text.replace(".", "... [pause]")
    if pacing is NarrativePacing.FAST:
        return re.sub(r"\s+", " ", text)
    return text


def apply_technical_level(text: str, level: TechnicalLevel) -> str:
    if level is TechnicalLevel.BEGINNER:
        for technical, plain in BEGINNER_REPLACEMENTS.items():
            text = re.sub(technical, plain, text, flags=re.IGNORECASE)
        return text
    if level is TechnicalLevel.EXPERT:
        return text.replace("changed", "refactored the implementation to")
    return text


def apply_communication_style(text: str, style: CommunicationStyle) -> str:
    if style is CommunicationStyle.FORMAL:
        text = re.sub(r"let's", "we shall", text, flags=re.IGNORECASE)
        return re.sub(r"we're", "we are", text, flags=re.IGNORECASE)
    if style is CommunicationStyle.CONVERSATIONAL:
        text = re.sub(r"we shall", "let's", text, flags=re.IGNORECASE)
        return re.sub(r"we are", "we're", text, flags=re.IGNORECASE)
    return text


def voiceover_for(
    content: str,
    section_type: SectionType,
    style: NarrativeStyle,
    audience: ScriptAudience,
) -> str:
    text = apply_tone(content, style.tone)
    text = apply_pacing(text, style.pacing)
    text = apply_technical_level(text, audience.technical_level)
    text = apply_communication_style(text, audience.communication_style)
    lead_in = LEAD_INS.get(section_type)
    return f"{lead_in} {text}" if lead_in else text


def _sentence_for(content_type: ContentType, payload: Any) -> str:
    data = payload if isinstance(payload, dict) else {}

    if content_type is ContentType.PR_OVERVIEW:
        if "pr_number" in data:
            return (
                f'Pull request #{data["pr_number"]} "{data.get("title", "")}" was opened by '
                f'{data.get("author", "an unknown author")} in {data.get("repository", "the repository")}.'
            )
        stats = data.get("stats") or {}
        description = (data.get("description") or "").strip()
        sentence = (
            f"It touches {stats.get('total_files', 0)} files with {stats.get('total_additions', 0)} "
            f"additions and {stats.get('total_deletions', 0)} deletions."
        )
        return f"{description} {sentence}".strip()

    if content_type is ContentType.COMMIT_DATA:
        commits = data.get("commits", [])
        messages = ", ".join(c.get("short_message", "") for c in commits[:3] if c.get("short_message"))
        sentence = f"The work landed in {len(commits)} commits."
        return f"{sentence} Highlights include {messages}." if messages else sentence

    if content_type is ContentType.FILE_CHANGES:
        files = data.get("files", [])
        significant = len(data.get("significant_changes", []))
        languages = [row.get("language") for row in data.get("language_breakdown", [])[:3]]
        sentence = f"{len(files)} files changed, {significant} of them significantly."
        return f"{sentence} Main languages are {', '.join(languages)}." if languages else sentence

    if content_type is ContentType.REVIEW_DATA:
        reviews = data.get("reviews", [])
        reviewers = sorted({r.get("reviewer", "") for r in reviews if r.get("reviewer")})
        sentence = f"{len(reviews)} reviews ended with a {data.get('consensus', 'pending')} consensus."
        return f"{sentence} Reviewers were {', '.join(reviewers)}." if reviewers else sentence

    if content_type is ContentType.PARTICIPANT_DATA:
        people = payload if isinstance(payload, list) else []
        logins = [p.get("login", "") for p in people[:5]]
        return f"{len(people)} people took part: {', '.join(logins)}." if people else "No other participants."

    if content_type is ContentType.METRICS:
        return (
            f"In total {data.get('total_additions', 0)} lines were added and "
            f"{data.get('total_deletions', 0)} removed across {data.get('total_files', 0)} files "
            f"and {data.get('total_commits', 0)} commits."
        )

    if content_type is ContentType.TIMELINE_EVENTS:
        events = data.get("events", [])
        key_events = data.get("key_events", [])
        sentence = f"The timeline records {len(events)} events."
        return f"{sentence} Key moments: {', '.join(key_events)}." if key_events else sentence

    if content_type is ContentType.IMPACT_ANALYSIS:
        achievements = data.get("key_achievements", [])
        sentence = f"This is a {str(data.get('impact', 'minor')).lower()} change that was {data.get('outcome', 'opened')}."
        return f"{sentence} {'. '.join(achievements)}." if achievements else sentence

    return f"Content from {content_type.value}."


def section_content(items: Iterable[ContentItem]) -> str:
    return " ".join(_sentence_for(item.type, item.payload) for item in items)


# -- visuals ------------------------------------------------------------------


def visual_cues(
    section_type: SectionType,
    definition: SectionDefinition | None,
    duration: float,
) -> list[VisualCue]:
    """One cue per visual requirement (required and optional), evenly spaced."""
    requirements = definition.visual_requirements if definition else ()
    if not requirements:
        return [
            VisualCue(
                timestamp=0.0,
                type=DEFAULT_CUE_TYPE,
                description=f"Default visual for {section_type.value} section",
                duration=duration * CUE_DURATION_SHARE,
                properties={"style": "fade_in"},
            )
        ]
    count = len(requirements)
    return [
        VisualCue(
            timestamp=duration / count * index,
            type=CUE_TYPES.get(requirement.type, DEFAULT_CUE_TYPE),
            description=f"{requirement.type} visualization for {section_type.value} section",
            duration=float(requirement.properties.get("duration", duration * CUE_DURATION_SHARE)),
            properties=dict(requirement.properties),
        )
        for index, requirement in enumerate(requirements)
    ]


# -- titles -------------------------------------------------------------------


def script_title(video_title: str, audience: ScriptAudience) -> str:
    prefix = TITLE_PREFIXES.get(audience.primary, DEFAULT_TITLE_PREFIX)
    return f"{prefix} {video_title}"


def framing_content(video_title: str, description: str) -> str:
    return f"{video_title}. {description}".strip()


def script_description(template_type: TemplateType, audience: ScriptAudience, description: str) -> str:
    audience_name = audience.primary.value if audience.primary else "general"
    return f"{template_type.value.capitalize()} video script for {audience_name} audience - {description}"


class ScriptAssembler:
    def assemble(
        self,
        optimization: DurationOptimizationResult,
        template: Template | None,
        audience: ScriptAudience,
        style: NarrativeStyle,
        context: ConditionContext,
        *,
        fallback_content: str = "",
    ) -> list[ScriptSection]:
        """Sections without items (framing sections) narrate `fallback_content`."""
        by_type: dict[SectionType, OptimizedSection] = {
            section.section_type: section for section in optimization.sections
        }
        order = order_sections(by_type, template, context)
        transitions = {
            (rule.from_section, rule.to_section): rule for rule in (template.transition_rules if template else ())
        }

        sections: list[ScriptSection] = []
        start = 0.0
        for index, section_type in enumerate(order):
            optimized = by_type[section_type]
            duration = optimized.optimized_duration
            if optimized.items:
                content = section_content(optimized.items)
            else:
                content = fallback_content or f"{SECTION_TITLES.get(section_type, 'Section')}."

            transition = None
            if index + 1 < len(order):
                rule = transitions.get((section_type, order[index + 1]))
                if rule is not None:
                    transition = SectionTransition(
                        style=rule.style, duration=rule.duration, to_section=rule.to_section
                    )

            sections.append(
                ScriptSection(
                    id=f"section_{section_type.value}",
                    type=section_type,
                    title=SECTION_TITLES.get(section_type, "Section"),
                    content=content,
                    voiceover=voiceover_for(content, section_type, style, audience),
                    visual_cues=visual_cues(
                        section_type, template.find_section(section_type) if template else None, duration
                    ),
                    duration_seconds=duration,
                    timing_window=TimingWindow(start=start, end=start + duration),
                    priority=optimized.priority,
                    source_items=list(dict.fromkeys(item.type.value for item in optimized.items)),
                    transition=transition,
                )
            )
            start += duration

        logger.info(
            "[script_assembler] Assembled %d section(s): %s",
            len(sections),
            ", ".join(section.type.value for section in sections),
        )
        return sections


script_assembler = ScriptAssembler()
