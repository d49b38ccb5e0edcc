"""
CLI-specific formatting functions for human-readable output.

This module handles presentation formatting for the CLI:
- JSON and YAML dumps
- Rich tables for property listings and scheduler summaries
"""

import json
from typing import Any, Dict, List

import yaml
from rich.console import Console
from rich.table import Table


def format_output(data: Any, format_type: str) -> str:
    """Format data according to the specified format type."""
    if format_type == "yaml":
        return yaml.safe_dump(data, default_flow_style=False, sort_keys=False)
    elif format_type == "table":
        return format_table_output(data)
    else:
        # Default to JSON
        return json.dumps(data, indent=2, default=str)


def format_table_output(data: Any) -> str:
    """Format data as a table."""
    if isinstance(data, dict) and "properties" in data:
        return format_properties_table(data["properties"], data.get("source"))
    elif isinstance(data, dict) and "schedulers" in data:
        return format_schedulers_table(data["schedulers"])
    else:
        # Fallback to JSON for unknown data structures
        return json.dumps(data, indent=2, default=str)


def _render(table: Table) -> str:
    console = Console(record=True, width=120)
    with console.capture() as capture:
        console.print(table)
    return capture.get()


def format_properties_table(properties: Dict[str, str], source: Any = None) -> str:
    """Format a resolved configuration set as a two column table."""
    if not properties:
        return "No properties found."

    table = Table(show_header=True, header_style="bold magenta", title=source)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="green")
    for key in sorted(properties):
        table.add_row(key, properties[key])
    return _render(table)


def format_schedulers_table(schedulers: List[Dict[str, Any]]) -> str:
    """Format scheduler summaries as a table."""
    if not schedulers:
        return "No schedulers found."

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Name", style="cyan")
    table.add_column("Instance ID", style="green")
    table.add_column("Started", style="yellow")
    table.add_column("Shutdown", style="red")
    for scheduler in schedulers:
        table.add_row(
            str(scheduler.get("name", "")),
            str(scheduler.get("instance_id", "")),
            str(scheduler.get("started", "")),
            str(scheduler.get("shutdown", "")),
        )
    return _render(table)
