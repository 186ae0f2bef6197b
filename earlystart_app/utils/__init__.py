"""
Utility functions module.

Time Semantics:
- Deployment timestamps from the GitHub API are ISO 8601 UTC strings
- Elapsed time is measured against UTC wall-clock time
- Missing or unparseable timestamps render as "unknown time"
"""
