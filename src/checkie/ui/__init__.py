"""PyQt6 presentation layer: board view, main window, move orchestration."""
