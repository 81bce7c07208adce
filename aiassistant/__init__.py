"""AI assistant for messaging apps.

Generates text answers and images through the assistant backend and packs
results into message links that can be reopened later.
"""

__version__ = "0.1.0"
