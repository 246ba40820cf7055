"""Ralph: an autonomous loop that works through prd.json stories with a coding agent."""

__version__ = "0.1.0"
