"""
Task tracker: a small task list backed by one SQLite table.

Subpackages:
- tasks/: models and the SQLite store
- core/: task manager view, cache, ports
- cli/: bootstrap, slash commands, entrypoint
- connectors/: web (Flask) and console front ends
"""
