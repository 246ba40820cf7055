"""
The Ralph loop controller.

Each iteration re-reads prd.json, picks the next story, hands prompt.md to the
agent, and on success runs post-processing and records the story as done.
Agent and tool failures never stop the loop; only problems reading or writing
durable state do.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from ralph.agents.invoker import AgentInvoker, AgentResult
from ralph.lib import console
from ralph.lib.config import LoopConfig
from ralph.lib.constants import OUTPUT_PREVIEW_CHARS
from ralph.lib.errors import InstructionError
from ralph.lib.progress import append_progress, format_entry
from ralph.prd.models import Story
from ralph.prd.select import pending_stories, select_next_story
from ralph.prd.store import load_prd, save_prd
from ralph.runner.fsm import LoopFSM
from ralph.runner.postprocess import StepOutcome, run_post_processing

logger = logging.getLogger(__name__)

PostProcessor = Callable[[LoopConfig, Story], list[StepOutcome]]


@dataclass
class LoopOutcome:
    state: str          # One of fsm.TERMINAL_STATES
    iterations: int     # Iterations started


def _preview(text: str) -> str:
    if len(text) > OUTPUT_PREVIEW_CHARS:
        return text[:OUTPUT_PREVIEW_CHARS] + "..."
    return text


class LoopController:
    def __init__(
        self,
        config: LoopConfig,
        invoker: Optional[AgentInvoker] = None,
        post_processor: Optional[PostProcessor] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.config = config
        self.invoker = invoker or AgentInvoker(config.agent_command)
        self.post_processor = post_processor or run_post_processing
        self.sleep = sleep
        self.fsm = LoopFSM()

    def run(self) -> LoopOutcome:
        """
        Run until every story passes, the agent declares completion, or the
        iteration budget is spent.

        Raises:
            MalformedStateError, PersistenceError, InstructionError: fatal
            state problems; the loop stops immediately
        """
        self.fsm = LoopFSM()
        cfg = self.config
        console.info(f'🚀 Starting Ralph loop using agent command "{cfg.agent_command}"')
        if cfg.dry_run:
            console.info("🔍 DRY-RUN MODE: No commits or file modifications will be made")

        iteration = 0
        for iteration in range(1, cfg.max_iterations + 1):
            self.fsm.begin_iteration()
            self.run_iteration(iteration)
            if self.fsm.is_terminal:
                break
        else:
            self.fsm.budget_spent()
            logger.info(f"Iteration budget of {cfg.max_iterations} spent")

        console.banner("\n🏁 Ralph loop finished.")
        return LoopOutcome(state=self.fsm.state, iterations=iteration)

    def run_iteration(self, iteration: int) -> None:
        cfg = self.config
        console.info(f"\n═══ Iteration {iteration}/{cfg.max_iterations} ═══")

        task_list = load_prd(cfg.prd_path)
        story = select_next_story(task_list.stories)
        if story is None:
            self.fsm.nothing_left()
            console.success("✅ All stories completed.")
            return

        self.fsm.story_selected()
        console.info(f"📋 Working on: {story.id} - {story.title}")
        console.info(f"   Remaining stories: {len(pending_stories(task_list.stories))}")

        prompt = self.read_prompt()
        console.info("🤖 Running agent...")
        result = self.invoker.invoke(prompt, cfg.project_root)
        self.report_agent_result(result)

        if result.completion_signaled:
            self.fsm.completion_signaled()
            console.success("🎉 All work complete. Exiting.")
            return

        if not result.succeeded:
            # Same story stays pending and is picked again next iteration
            self.fsm.agent_failed()
            console.warning("⏭️  Skipping post-processing (agent did not succeed).")
            return

        self.fsm.agent_succeeded()
        self.post_processor(cfg, story)

        if cfg.dry_run:
            console.info(f"[DRY-RUN] Would mark {story.id} as passed in prd.json")
            console.info("[DRY-RUN] Would append progress entry to progress.md")
        else:
            self.fsm.record()
            self.record_completion(story)

        self.fsm.iteration_done()

        if iteration < cfg.max_iterations:
            console.info("⏳ Waiting before next iteration...")
            self.sleep(cfg.iteration_delay)

    def read_prompt(self) -> str:
        path = self.config.prompt_path
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise InstructionError(f"Cannot read agent prompt {path}: {e}") from None

    def report_agent_result(self, result: AgentResult) -> None:
        if result.error is not None:
            console.error(f"❌ Error running agent command: {result.error}")
        else:
            if result.stdout.strip():
                console.info(f"   Agent output: {_preview(result.stdout)}")
            if result.exit_code == 0:
                console.success("✅ Agent completed successfully.")
            else:
                console.warning(f"⚠️  Agent exited with code {result.exit_code}")
                if result.stderr.strip():
                    console.warning(f"   Error: {result.stderr[:OUTPUT_PREVIEW_CHARS]}")

        if result.completion_signaled:
            console.success("✅ Completion promise detected.")

    def record_completion(self, story: Story) -> None:
        """Mark the story done in prd.json and add a ledger entry.

        prd.json is re-read so edits made while the agent ran are kept; only
        this story's `passes` flag changes.
        """
        cfg = self.config
        task_list = load_prd(cfg.prd_path)
        current = task_list.get_story(story.id)
        if current is None:
            console.warning(f"⚠️  Story {story.id} is no longer in prd.json; not marking it passed.")
        else:
            current.passes = True
            save_prd(cfg.prd_path, task_list)
            console.success(f"✅ Marked {story.id} as passed.")
        append_progress(cfg.progress_path, format_entry(story))
