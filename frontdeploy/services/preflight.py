"""Checks run before any side effect."""

import shutil
from typing import Optional

from frontdeploy.constants import REQUIRED_TOOLS
from frontdeploy.exceptions import ToolNotFoundError


def check_tools(tools: Optional[list[str]] = None) -> None:
    """Raise ToolNotFoundError for the first tool missing from PATH."""
    for tool in tools or REQUIRED_TOOLS:
        if shutil.which(tool) is None:
            raise ToolNotFoundError(tool)
