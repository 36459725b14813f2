"""
CLI layer - Typer commands for inspecting time slots.
"""
