"""
mesa-lite abstract components.

This package contains abstract base classes and mixins that define the core
interfaces and shared functionality of mesa-lite.

Classes:
    mixin.py:
        - CopyMixin: Mixin class providing fast copy functionality.

    agentset.py:
        - AbstractAgentSet: Abstract base class for ordered agent views.

    space.py:
        - AbstractDiscreteSpace: Abstract base class for cell-based spaces.

    datacollector.py:
        - AbstractDataCollector: Abstract base class for data collectors.

Usage:
    These classes are not meant to be instantiated directly. Instead, they
    should be inherited by concrete implementations in mesa_lite.concrete.

    from mesa_lite.abstract.agentset import AbstractAgentSet

    class ConcreteAgentSet(AbstractAgentSet):
        # Implement abstract methods here
        ...

Note:
    The abstract classes use Python's ABC (Abstract Base Class) module to define
    abstract methods that must be implemented by concrete subclasses.
"""
