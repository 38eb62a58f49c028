# config_local.example.py

"""
Example local overrides.

Usage:
  1) Copy this file to `config_local.py`
  2) Adjust values for your machine
  3) Never commit `config_local.py` (it is gitignored)

Prefer `.env` for the connection string. This file should contain only safe overrides.
"""

# Example: use the console instead of the browser UI
# CONSOLE_ENABLED = True
# WEB_ENABLED = False
