"""Gradio user interface for Memeworks.

- models: Per-session UIState
- state: Session initialization and catalog installation
- components: Template picker and caption inputs
- handlers: Event handlers (catalog, selection, download)
- app: Blocks layout and the ``memeworks-ui`` entry point
"""
