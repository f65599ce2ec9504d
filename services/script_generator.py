"""
Top-level script generation.

``ScriptGenerator.generate_script`` runs the whole pipeline for one PR:
template selection, transformation, content adaptation, duration-bounded
selection, duration optimization, assembly and quality assessment. It never
raises; failures come back as ``success=False`` with a placeholder script so
callers always get a structurally complete result.
"""

from __future__ import annotations

import logging
import secrets
import time

from models.audience import NarrativeStyle
from models.config import ScriptGenerationConfig
from models.github import PRAggregate
from models.script import (
    GenerationPerformance,
    QualityMetrics,
    ScriptGenerationResult,
    ScriptMetadata,
    VideoScript,
)
from models.template import Template, TemplateType
from models.video import VideoType
from services.conditions import ConditionContext
from services.content_adapter import ContentAdapter, content_adapter, content_volumes
from services.duration_optimizer import DurationOptimizer, duration_optimizer
from services.pr_transformer import PRVideoTransformer, pr_transformer
from services.quality import QualityAssessor, quality_assessor
from services.script_assembler import (
    ScriptAssembler,
    framing_content,
    script_assembler,
    script_description,
    script_title,
)
from services.selector import select_for_duration
from services.templates import TemplateRegistry

logger = logging.getLogger(__name__)

VIDEO_TYPES = {
    TemplateType.SUMMARY: VideoType.SUMMARY,
    TemplateType.DETAILED: VideoType.DETAILED,
    TemplateType.TECHNICAL: VideoType.TECHNICAL,
}

EMPTY_SELECTION_WARNING = "No content was selected; the script keeps only its framing sections"


def _elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000


def data_warnings(aggregate: PRAggregate) -> list[str]:
    warnings = []
    if not aggregate.commits:
        warnings.append("No commits found; code change content will be sparse")
    if not aggregate.files:
        warnings.append("No files found; file analysis content will be sparse")
    if not aggregate.reviews:
        warnings.append("No reviews found; review process content will be sparse")
    return warnings


def range_warnings(template: Template, target_duration: float) -> list[str]:
    bounds = template.duration_range
    if bounds.min <= target_duration <= bounds.max:
        return []
    return [
        f"Target duration {target_duration:.0f}s is outside the {template.name} range "
        f"of {bounds.min:.0f}-{bounds.max:.0f}s"
    ]


def placeholder_script(config: ScriptGenerationConfig) -> VideoScript:
    return VideoScript(
        id=f"empty_script_{secrets.token_urlsafe(8)}",
        title="Script Generation Failed",
        description="An error occurred during script generation",
        target_duration_seconds=config.target_duration_seconds,
        sections=[],
        audience=config.audience,
        style=NarrativeStyle(),
        metadata=ScriptMetadata(
            template_type=config.template_type,
            strategy="none",
            quality=QualityMetrics.zero(),
        ),
    )


class ScriptGenerator:
    def __init__(
        self,
        registry: TemplateRegistry,
        *,
        transformer: PRVideoTransformer = pr_transformer,
        adapter: ContentAdapter = content_adapter,
        optimizer: DurationOptimizer = duration_optimizer,
        assembler: ScriptAssembler = script_assembler,
        assessor: QualityAssessor = quality_assessor,
    ) -> None:
        self._registry = registry
        self._transformer = transformer
        self._adapter = adapter
        self._optimizer = optimizer
        self._assembler = assembler
        self._assessor = assessor

    async def generate_script(
        self,
        aggregate: PRAggregate,
        config: ScriptGenerationConfig,
    ) -> ScriptGenerationResult:
        started = time.perf_counter()
        performance = GenerationPerformance()
        audience = config.audience
        target = config.target_duration_seconds
        logger.info(
            "[script_generator] Generating %s script for %s audience (PR #%s, target=%.0fs)",
            config.template_type.value,
            audience.primary.value if audience.primary else "unspecified",
            aggregate.pull_request.number,
            target,
        )

        try:
            step = time.perf_counter()
            template = self._registry.select_template(config.template_type)
            performance.template_time = _elapsed_ms(step)

            warnings = data_warnings(aggregate) + range_warnings(template, target)
            for warning in warnings:
                logger.warning("[script_generator] %s", warning)

            metadata = self._transformer.transform(
                aggregate, VIDEO_TYPES.get(config.template_type, VideoType.SUMMARY)
            )
            strategy = template.defaults.content_selection
            if config.content_selection_overrides is not None:
                strategy = config.content_selection_overrides.merge_into(strategy)
            style = config.style.apply_to(template.defaults.style) if config.style else template.defaults.style
            context = ConditionContext(
                audience=audience, target_duration=target, volumes=content_volumes(metadata)
            )

            step = time.perf_counter()
            items = self._adapter.adapt_content(metadata, config.template_type, audience, target, strategy)
            selected = select_for_duration(items, target)
            if not selected:
                warnings.append(EMPTY_SELECTION_WARNING)
                logger.warning("[script_generator] %s", EMPTY_SELECTION_WARNING)
            performance.adaptation_time = _elapsed_ms(step)

            step = time.perf_counter()
            optimization = self._optimizer.optimize_for_duration(
                selected,
                target,
                template,
                custom_adaptation=config.adaptation_overrides,
                context=context,
            )
            performance.processing_time = _elapsed_ms(step)
            warnings.extend(optimization.warnings)

            sections = self._assembler.assemble(
                optimization,
                template,
                audience,
                style,
                context,
                fallback_content=framing_content(metadata.title, metadata.description),
            )

            step = time.perf_counter()
            quality = self._assessor.assess(sections, target, optimization.compliance, audience)
            alternatives = self._assessor.suggestions(
                quality, sections, target, config.template_type, audience
            )
            performance.quality_time = _elapsed_ms(step)

            script = VideoScript(
                id=f"script_{secrets.token_urlsafe(8)}",
                title=script_title(metadata.title, audience),
                description=script_description(config.template_type, audience, metadata.description),
                target_duration_seconds=target,
                sections=sections,
                audience=audience,
                style=style,
                metadata=ScriptMetadata(
                    template_type=config.template_type,
                    strategy=optimization.metadata.strategy,
                    quality=quality,
                    selection_strategy=strategy.name,
                    key_metrics=metadata.key_metrics,
                ),
            )
        except Exception as exc:  # noqa: BLE001
            logger.error("[script_generator] Script generation failed: %s", exc, exc_info=True)
            performance.generation_time = _elapsed_ms(started)
            return ScriptGenerationResult(
                script=placeholder_script(config),
                success=False,
                errors=[str(exc)],
                performance=performance,
            )

        performance.generation_time = _elapsed_ms(started)
        logger.info(
            "[script_generator] Script %s complete: %d section(s), %.1fs, quality %.2f in %.0fms",
            script.id,
            len(script.sections),
            script.total_duration,
            quality.overall,
            performance.generation_time,
        )
        return ScriptGenerationResult(
            script=script,
            success=True,
            warnings=warnings,
            performance=performance,
            alternatives=alternatives,
        )
