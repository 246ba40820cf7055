"""
Post-processing after a successful agent run: lint, type-check, commit.

Each step is best-effort. A failing step is reported and the next step still
runs; nothing here raises. In dry-run mode no step runs at all.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from ralph.git import INDEX_CLEAN, INDEX_DIRTY, commit, diff_staged, stage_all
from ralph.lib import console
from ralph.lib.config import LoopConfig
from ralph.prd.models import Story
from ralph.runner.tools import run_tool

logger = logging.getLogger(__name__)


class StepResult(Enum):
    PASSED = "passed"
    FAILED = "failed"
    NOOP = "noop"          # Commit step with nothing to commit
    SKIPPED = "skipped"    # Dry run


@dataclass
class StepOutcome:
    name: str
    result: StepResult
    detail: str = ""


STEP_ORDER = ["lint", "typecheck", "commit"]


def run_lint(config: LoopConfig, story: Story) -> StepOutcome:
    console.info("🧹 Running lint...")
    result = run_tool(config.lint_command, config.project_root)
    if result.success:
        console.success("✅ Lint complete.")
        return StepOutcome("lint", StepResult.PASSED)
    console.warning("⚠️  Lint had errors (continuing anyway)")
    logger.info(f"Lint failed: {result.summary()}")
    return StepOutcome("lint", StepResult.FAILED, result.summary())


def run_typecheck(config: LoopConfig, story: Story) -> StepOutcome:
    console.info("🔍 Running type check...")
    result = run_tool(config.typecheck_command, config.project_root)
    if result.success:
        console.success("✅ Type check complete.")
        return StepOutcome("typecheck", StepResult.PASSED)
    console.warning("⚠️  Type check had errors (continuing anyway)")
    logger.info(f"Type check failed: {result.summary()}")
    return StepOutcome("typecheck", StepResult.FAILED, result.summary())


def run_commit(config: LoopConfig, story: Story) -> StepOutcome:
    console.info("📦 Committing changes...")
    root = config.project_root

    staged = stage_all(root)
    if not staged.success:
        detail = staged.detail
        console.warning(f"⚠️  Git add had errors: {detail}")
        return StepOutcome("commit", StepResult.FAILED, detail)

    diff = diff_staged(root)
    if diff.returncode == INDEX_CLEAN:
        console.info("ℹ️  No changes to commit.")
        return StepOutcome("commit", StepResult.NOOP, "nothing to commit")
    if diff.returncode != INDEX_DIRTY:
        detail = diff.detail
        console.warning(f"⚠️  Git diff had errors: {detail}")
        return StepOutcome("commit", StepResult.FAILED, detail)

    message = story.commit_message
    result = commit(root, message)
    if not result.success:
        detail = result.detail
        console.warning(f"⚠️  Git commit had errors: {detail}")
        return StepOutcome("commit", StepResult.FAILED, detail)

    console.success("✅ Commit done.")
    return StepOutcome("commit", StepResult.PASSED, message)


STEPS = {
    "lint": run_lint,
    "typecheck": run_typecheck,
    "commit": run_commit,
}


def run_post_processing(config: LoopConfig, story: Story) -> list[StepOutcome]:
    """Run lint, type-check and commit in order and report each outcome."""
    if config.dry_run:
        console.info(
            f"📦 [DRY-RUN] Skipping lint, type check and commit. "
            f"Would commit changes with message: {story.commit_message}"
        )
        return [StepOutcome(name, StepResult.SKIPPED, "dry run") for name in STEP_ORDER]

    outcomes = []
    for name in STEP_ORDER:
        outcome = STEPS[name](config, story)
        logger.debug(f"Post-processing step {name}: {outcome.result.value}")
        outcomes.append(outcome)
    return outcomes
