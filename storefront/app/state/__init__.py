"""State container for the console application.

Architecture:
- StoreStateMachine: owns AppState, dispatches actions, runs timers
- Store: Service locator for accessing the machine from any component
"""

from .store import Store, StoreStateMachine

__all__ = ["Store", "StoreStateMachine"]
