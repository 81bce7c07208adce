"""AI assistant adapter package.

Architectural role:
- Defines the external interaction boundary for CLI and HTTP interfaces.
- Delegates generation to `aiassistant.core` and link handling to
  `aiassistant.messages`.
"""
