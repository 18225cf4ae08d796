"""
Core Package.

Contains the enforcement logic:
- Declaration tree model
- Whitelist matching and extension inspection
- Enforcement rules and the declaration walker
- Engine, diagnostics sinks and trace logger
"""
