"""Project materialization: plan every template entry, then apply the plan."""

from __future__ import annotations

import logging
import stat
from pathlib import Path

from ..core.models import (
    EntryKind,
    FailureStage,
    PlanAction,
    PlannedEntry,
    RunReport,
    TemplateContext,
)
from ..core.settings import Settings
from ..layout.paths import PathResolutionError, is_root_entry, resolve_destination
from ..layout.walker import walk_source_dir
from ..manifest import find_manifest, load_manifest
from .engine import RenderError, TemplateReadError, render_file
from .io import MaterializeError, ensure_directory, write_file

logger = logging.getLogger(__name__)


def _nested_destination(source_root: Path, destination_root: Path) -> list[Path]:
    source = source_root.resolve()
    destination = destination_root.resolve()
    if destination != source and source in destination.parents:
        return [destination_root]
    return []


def plan_project(
    source_root: Path,
    destination_root: Path,
    context: TemplateContext,
    settings: Settings,
    report: RunReport | None = None,
) -> list[PlannedEntry]:
    """Resolve the destination and action of every template entry.

    Nothing is written. Entries whose destination cannot be resolved are
    recorded as failures on ``report`` and left out of the plan.

    Args:
        source_root: Template root directory
        destination_root: Target directory
        context: Template context
        settings: Runtime settings
        report: Report collecting resolve failures

    Returns:
        Planned entries in traversal order
    """
    plan: list[PlannedEntry] = []
    exclude = _nested_destination(source_root, destination_root)

    for entry in walk_source_dir(source_root, exclude=exclude):
        try:
            destination = resolve_destination(
                entry.path,
                source_root,
                destination_root,
                context,
                token=settings.placeholder_token,
            )
        except PathResolutionError as e:
            logger.error(f"Cannot resolve destination: {entry.path} {e}")
            if report is not None:
                report.record_failure(entry.path, FailureStage.RESOLVE, e)
            continue

        if entry.kind is EntryKind.DIRECTORY:
            action = PlanAction.ENSURE_DIRECTORY
        elif destination.name == settings.manifest_file_name:
            action = PlanAction.SKIP_MANIFEST
        else:
            action = PlanAction.RENDER_FILE

        plan.append(
            PlannedEntry(
                source=entry,
                destination=destination,
                action=action,
                is_root=is_root_entry(entry.path, source_root),
            )
        )

    logger.debug(f"Planned {len(plan)} entries from {source_root}")
    return plan


def _source_mode(path: Path) -> int | None:
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except OSError:
        return None


def _apply_directory(entry: PlannedEntry, report: RunReport) -> None:
    try:
        created = ensure_directory(entry.destination, parents=entry.is_root)
    except MaterializeError as e:
        logger.error(f"Cannot create directory: {entry.destination} {e}")
        report.record_failure(entry.destination, FailureStage.DIRECTORY, e)
        return

    if created:
        report.created_directories.append(entry.destination)
    else:
        report.existing_directories.append(entry.destination)


def _apply_file(entry: PlannedEntry, context: TemplateContext, report: RunReport) -> None:
    source = entry.source.path
    try:
        content = render_file(source, context)
    except TemplateReadError as e:
        logger.error(f"Cannot read template: {source} {e}")
        report.record_failure(source, FailureStage.READ, e)
        return
    except RenderError as e:
        logger.error(f"Cannot render template: {source} {e}")
        report.record_failure(source, FailureStage.RENDER, e)
        return

    try:
        write_file(entry.destination, content, mode=_source_mode(source))
    except MaterializeError as e:
        logger.error(f"Cannot create file: {entry.destination} {e}")
        report.record_failure(entry.destination, FailureStage.WRITE, e)
        return

    report.written_files.append(entry.destination)


def materialize_project(
    plan: list[PlannedEntry],
    context: TemplateContext,
    report: RunReport | None = None,
) -> RunReport:
    """Apply a plan in order, isolating failures to their entry.

    Args:
        plan: Planned entries, parents before children
        context: Template context
        report: Report to extend; a new one is created when omitted

    Returns:
        Run report
    """
    report = report if report is not None else RunReport()

    for entry in plan:
        logger.debug(f"Processing: {entry.source.path}")

        if entry.action is PlanAction.ENSURE_DIRECTORY:
            _apply_directory(entry, report)
        elif entry.action is PlanAction.SKIP_MANIFEST:
            logger.debug(f"Skipping manifest: {entry.source.path}")
            report.skipped_files.append(entry.source.path)
        else:
            _apply_file(entry, context, report)

    return report


def generate_project(
    source_root: Path,
    destination_root: Path,
    *,
    settings: Settings | None = None,
) -> RunReport:
    """Load the manifest and materialize a template into ``destination_root``.

    Manifest errors propagate before anything is written. Every other
    failure is recorded on the returned report.

    Args:
        source_root: Template root directory containing the manifest
        destination_root: Target directory, created if absent
        settings: Runtime settings

    Returns:
        Run report
    """
    settings = settings or Settings()

    manifest_path = find_manifest(source_root, settings.manifest_file_name)
    context = load_manifest(manifest_path)

    report = RunReport()
    plan = plan_project(source_root, destination_root, context, settings, report)
    materialize_project(plan, context, report)

    logger.info(
        f"Materialized {len(report.written_files)} file(s) "
        f"and {len(report.created_directories)} director(ies) "
        f"with {len(report.failures)} failure(s)"
    )
    return report
