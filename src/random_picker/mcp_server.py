"""
Random Picker MCP Server.

Exposes picking, history and favorites as MCP tools.

Install and register:
    pip install random-picker[mcp]
    register `random-picker-mcp` as a stdio MCP server
"""

from mcp.server.fastmcp import FastMCP

from .errors import ParseError, PersistenceError
from .parser import PickRequest, check_count
from .sampler import pick
from .store import PickerStore

mcp = FastMCP("random-picker")

_store = None


def _get_store() -> PickerStore:
    global _store
    if _store is None:
        _store = PickerStore.load()
    return _store


def _format_list(entries, empty: str) -> str:
    if not entries:
        return empty
    return "\n".join(f"{i}: {entry}" for i, entry in enumerate(entries))


@mcp.tool()
def pick_random(definition: str, count: int = 1, max_repeat: int = -1) -> str:
    """Pick values at random from a weighted definition.

    Args:
        definition: Items separated by ';', each optionally weighted with ':'
                    (e.g., "pizza:3;sushi;tacos:2")
        count: How many values to draw
        max_repeat: How often one item may come up; -1 for no limit
    """
    try:
        request = PickRequest(
            definition,
            check_count(count, "result count"),
            check_count(max_repeat, "max repeat count"),
        )
    except ParseError as e:
        return f"{e.title}: {e.message}"

    outcome = pick(request)
    if not outcome.ok:
        return f"{outcome.error.title}: {outcome.error.message}"

    lines = list(outcome.values)
    try:
        _get_store().add_history(definition)
    except PersistenceError as e:
        lines.append(f"(history not saved: {e.message})")
    return "\n".join(lines)


@mcp.tool()
def list_history(search: str = "") -> str:
    """List previously used definitions, most recent first.

    Args:
        search: Only show entries containing this text
    """
    return _format_list(_get_store().history(search), "No history result")


@mcp.tool()
def list_favorites(search: str = "") -> str:
    """List favorite definitions.

    Args:
        search: Only show entries containing this text
    """
    return _format_list(_get_store().favorites(search), "No favorite result")


@mcp.tool()
def add_favorite(definition: str) -> str:
    """Save a definition as a favorite.

    Args:
        definition: The random definition to keep
    """
    if not _get_store().add_favorite(definition):
        return f"Already a favorite: {definition}"
    return f"Added to favorites: {definition}"


@mcp.tool()
def remove_favorite(definition: str) -> str:
    """Remove a definition from the favorites.

    Args:
        definition: The random definition to drop
    """
    if not _get_store().remove_favorite(definition):
        return f"Not a favorite: {definition}"
    return f"Removed from favorites: {definition}"


def main():
    """Run the MCP server."""
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
