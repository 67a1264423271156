import json
import logging

from mcp.server.fastmcp import FastMCP

from .max_client import MaxClient
from .models import default_config

logging.basicConfig(level=logging.INFO, format="%(message)s")

mcp = FastMCP("building-wireframe")
client = MaxClient.from_env()

# Import tool modules to trigger @mcp.tool() registration
from .tools import building  # noqa: E402, F401


DEFAULT_CONFIG_URI = "resource://building-wireframe/default-config"


@mcp.resource(DEFAULT_CONFIG_URI)
def get_default_config() -> str:
    """The reference building configuration, as accepted by generate_building."""
    return json.dumps(default_config().to_dict(), indent=2)


@mcp.prompt()
def building_assistant() -> str:
    """Default assistant instructions for MCP clients."""
    return (
        "You generate procedural building wireframes.\n"
        "Use generate_building to inspect geometry before drawing it.\n"
        "Run check_placements before placing several buildings on the grid "
        "and move any that collide.\n"
        "Only call draw_building when the user wants the model in 3ds Max.\n"
        f"Reference configuration: {DEFAULT_CONFIG_URI}\n"
    )


def main():
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
