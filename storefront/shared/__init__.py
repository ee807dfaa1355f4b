"""
Storefront Shared Kernel
========================

Architecture:
- core: EventBus, configuration, timer scheduling
- domain: State model, actions and the per-component transitions
"""
