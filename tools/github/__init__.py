"""GitHub integration modules.

Split into:
  - api.py  : all HTTP calls to the GitHub REST API
  - types.py: small shared data structures

The comment sink in pipeline/emit.py is the only caller.
"""
