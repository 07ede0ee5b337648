"""Controller, formatting and threading helpers for the viewer."""
