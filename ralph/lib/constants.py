"""Shared constants for the Ralph loop."""

CONFIG_DIR_NAME = ".ralph"
PRD_FILE = "prd.json"
PROGRESS_FILE = "progress.md"
PROMPT_FILE = "prompt.md"
ENV_FILE = "ralph.env"

DEFAULT_AGENT_CMD = "claude"
DEFAULT_MAX_ITERATIONS = 10
DEFAULT_LINT_CMD = "bunx biome lint --apply ."
DEFAULT_TYPECHECK_CMD = "bun --bun x tsc --noEmit"

# Pause between successful iterations so the agent is not hammered
ITERATION_DELAY_SECONDS = 2.0

COMPLETION_SENTINEL = "<promise>COMPLETE</promise>"

# Lower rank is worked first
PRIORITY_ORDER = {
    "high": 0,
    "medium": 1,
    "low": 2,
}
DEFAULT_PRIORITY = "low"

LEDGER_SEPARATOR = "---"

# Characters of agent output echoed to the console
OUTPUT_PREVIEW_CHARS = 200
