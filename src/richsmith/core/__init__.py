"""Rendering engine primitives: registry, context, walker and placeholders."""
