"""
Request Body Dependencies

FastAPI decodes a declared body parameter before any dependency runs, so
a malformed body on an admin route would be answered with 400 before the
caller is authenticated. The bodies below are read inside a dependency
that first requires an admin: anonymous callers always get 401.

Usage:
======
    @router.post("/bulk-delete")
    async def bulk_delete_images(request: AdminBulkDeleteRequest, ...):
        ...
"""

import json
from typing import Annotated

from fastapi import Depends, Request

from portfolio.api.dependencies.auth import AdminUser
from portfolio.shared.core.exceptions import ValidationError
from portfolio.shared.schemas.deletion import BulkDeleteRequest


async def admin_bulk_delete_request(request: Request, admin: AdminUser) -> BulkDeleteRequest:
    """
    Parse a bulk delete body once the caller is known to be an admin.

    Raises:
        AuthenticationError: No admin token (via AdminUser)
        ValidationError: Body is not JSON
        pydantic.ValidationError: Body does not match either bulk form
    """
    try:
        payload = json.loads(await request.body())
    except ValueError:
        raise ValidationError("Request body must be valid JSON")
    return BulkDeleteRequest.model_validate(payload)


AdminBulkDeleteRequest = Annotated[BulkDeleteRequest, Depends(admin_bulk_delete_request)]
