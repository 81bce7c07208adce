"""Interactive orchestration package.

Composition:
    - `session`: single-slot generation controller used by CLI/host adapters.
"""
