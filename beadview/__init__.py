"""Beads multi-repository issue aggregation service.

Collects .beads/issues.jsonl files from many repositories and serves:
- A flattened, filterable issue list
- A dependency graph for visualization
- Aggregate analytics and "ready to work" issues
"""
