"""API configuration adapter.

Bridges the centralized swachh_config settings with the API layer. The
app factory stores the settings it was built with on ``app.state`` so
that tests can run several apps with different settings side by side.
"""

from typing import Annotated

from fastapi import Depends, Request

from swachh_config import Settings


def get_api_settings(request: Request) -> Settings:
    """Get the settings the running application was created with."""
    return request.app.state.settings


SettingsDep = Annotated[Settings, Depends(get_api_settings)]
