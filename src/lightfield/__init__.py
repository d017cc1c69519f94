"""LIGHTFIELD: procedural dot-field and scrolling light-board effects."""

__version__ = "0.1.0"
