"""Core data model and the four transform stages.

WHY: The core package holds everything that turns timing data into cues:
the IR dataclasses, the segmenter, the layout (line-wrap) engine, the
timing normalizer and the script mapper. The formatters and pipeline
build on top of it.

RULES:
- Stages exchange only the IR dataclasses from ir.py.
- Stages are pure functions: they return new lists and never mutate input.
- Tunable constants live in presets.py, not inside the stage modules.
"""
