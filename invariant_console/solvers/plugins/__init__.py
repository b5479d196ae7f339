"""
Invariant plugins package - auto-discovered by the registry.

To add a new invariant, create a new Python file in this directory
(e.g. ``my_invariant.py``) and define a class that inherits from
``InvariantPlugin``.  It will be picked up on the next registry build;
add its key to ``PLUGIN_ORDER`` to control where it runs.
"""
