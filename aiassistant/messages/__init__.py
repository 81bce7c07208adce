"""Host-message boundary.

Module split:
    - `codec`: result <-> wire URL.
    - `composer`: outgoing cards and reconstruction of opened messages.
"""
