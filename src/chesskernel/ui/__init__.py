"""PyQt6 rendering collaborator for the rules kernel."""
