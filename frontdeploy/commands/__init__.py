"""frontdeploy commands"""

from .deploy import DeployCommand

__all__ = [
    "DeployCommand",
]
