"""Index page and health check."""

from html import escape
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from starter.context import AppContext, get_context

router = APIRouter(tags=["index"])

INDEX_TEMPLATE = """<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>Baby Starter</title>
</head>
<body>
  <h1>Baby Starter</h1>
  <p>The API is running at <a href="{url}">{url}</a>.</p>
  <p>Register a user with <code>POST /api/user</code>.</p>
</body>
</html>
"""


@router.get("/", response_class=HTMLResponse)
async def get_index(context: Annotated[AppContext, Depends(get_context)]):
    """Static index page."""
    return INDEX_TEMPLATE.format(url=escape(context.settings.public_url))


@router.get("/health")
async def health_check(context: Annotated[AppContext, Depends(get_context)]):
    """Health check endpoint."""
    return {"status": "healthy", "environment": context.settings.environment}
