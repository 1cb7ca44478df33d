"""Low-level Azure ARM REST helpers.

The client in :mod:`az_arm_client.client` is assembled from these pieces:
resource path helpers, the token manager and the HTTP executor.
"""

import time as time  # noqa: F401  # re-export for mock patching

import requests as requests  # noqa: F401  # re-export for mock patching

# -- Auth --------------------------------------------------------------------
from az_arm_client.azure_api._auth import Token, TokenManager  # noqa: F401

# -- Requests ----------------------------------------------------------------
from az_arm_client.azure_api._http import RETRYABLE_ERRORS, HttpExecutor  # noqa: F401

# -- Pagination --------------------------------------------------------------
from az_arm_client.azure_api._pagination import _paginate  # noqa: F401

# -- URLs & ids --------------------------------------------------------------
from az_arm_client.azure_api._urls import (  # noqa: F401
    ResourceId,
    parse_name_from_id,
    rest_api_url,
)
