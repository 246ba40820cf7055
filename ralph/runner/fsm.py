"""Iteration state machine for the loop controller.

Uses the transitions library to make the legal moves of an iteration explicit:

    ready -> selecting -> invoking -> post_processing -> recording -> resting
                 |            |              |                          |
                 v            v              +----------> resting       v
           all_complete  agent_declared                         budget_exhausted

A failed agent run goes from invoking straight back to resting.
"""

import logging

from transitions import Machine

logger = logging.getLogger(__name__)


TERMINAL_STATES = [
    "all_complete",
    "agent_declared",
    "budget_exhausted",
]

STATES = [
    "ready",
    "selecting",
    "invoking",
    "post_processing",
    "recording",
    "resting",
] + TERMINAL_STATES

TRANSITIONS = [
    {"trigger": "begin_iteration", "source": ["ready", "resting"], "dest": "selecting"},

    {"trigger": "nothing_left", "source": "selecting", "dest": "all_complete"},
    {"trigger": "story_selected", "source": "selecting", "dest": "invoking"},

    {"trigger": "completion_signaled", "source": "invoking", "dest": "agent_declared"},
    {"trigger": "agent_failed", "source": "invoking", "dest": "resting"},
    {"trigger": "agent_succeeded", "source": "invoking", "dest": "post_processing"},

    # Dry run skips recording
    {"trigger": "record", "source": "post_processing", "dest": "recording"},
    {"trigger": "iteration_done", "source": ["post_processing", "recording"], "dest": "resting"},

    {"trigger": "budget_spent", "source": ["ready", "resting"], "dest": "budget_exhausted"},
]


class LoopFSM:
    """State machine for one loop run."""

    def __init__(self):
        self.history: list[tuple[str, str, str]] = []
        self.machine = Machine(
            model=self,
            states=STATES,
            transitions=TRANSITIONS,
            initial="ready",
            auto_transitions=False,
            send_event=True,
            after_state_change="on_state_change",
        )

    def on_state_change(self, event) -> None:
        from_state = event.transition.source
        to_state = event.transition.dest
        trigger = event.event.name
        self.history.append((from_state, to_state, trigger))
        logger.debug(f"[FSM] {from_state} -> {to_state} ({trigger})")

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_STATES

    def can(self, trigger: str) -> bool:
        return trigger in self.machine.get_triggers(self.state)
