"""CLI de fleet-probe (Typer + Rich)."""
