"""
Task board TUI - read-only terminal view of a tasks file.

Architecture:
- providers.py / task_provider.py: Data access layer (protocols + implementation)
- views/: Textual screen/widget components
- app.py: Main application entry point

Extensibility points:
1. New views: Add to views/, register in app.py
2. New data sources: Implement the TaskProvider protocol
"""
