"""Loop controller, iteration state machine and post-processing steps."""
