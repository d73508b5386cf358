"""
Noteful Backend: Named Resource Routes (folders, tags)
========================================================

What:  Builds the five CRUD endpoints for a resource that is just a unique
       name: GET list, GET one, POST, PUT, DELETE.
How:   `build_named_resource_router()` is called once for folders and once
       for tags with that resource's service dependency and schemas. The
       handlers are thin: extract path/body, call the service, shape the
       response. All validation and error translation happens in the service.

Path ids are declared as plain strings so a malformed id reaches the
service and produces the 400 "The `id` is not valid" body.
"""

from typing import Any, Callable, List, Optional, Type

from fastapi import APIRouter, Depends, Request, Response, status

from noteful.schemas.common import EntityResponse, ErrorResponse, NamedResourceIn

ERROR_RESPONSES = {
    400: {"description": "Invalid id, missing name or duplicate name", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}


def location_for(request: Request, entity_id: Any) -> str:
    """Location header value for a resource created at the request's path."""
    return f"{request.url.path.rstrip('/')}/{entity_id}"


def build_named_resource_router(
    *,
    path: str,
    label: str,
    service_dependency: Callable[..., Any],
    request_model: Type[NamedResourceIn],
    response_model: Type[EntityResponse],
) -> APIRouter:
    """
    Args:
        path:               Collection path, e.g. "/folders"
        label:              Singular resource name for docs, e.g. "folder"
        service_dependency: FastAPI dependency returning the resource service
        request_model:      Body schema for POST/PUT
        response_model:     Schema for single-object responses
    """
    router = APIRouter(prefix=path, tags=[label.capitalize() + "s"])

    @router.get(
        "",
        response_model=List[response_model],
        responses={500: ERROR_RESPONSES[500]},
        summary=f"List all {label}s ordered by name",
    )
    async def list_resources(service=Depends(service_dependency)):
        items = await service.list_all()
        return [response_model.model_validate(item) for item in items]

    @router.get(
        "/{resource_id}",
        response_model=response_model,
        responses={
            **ERROR_RESPONSES,
            404: {"description": f"{label.capitalize()} not found", "model": ErrorResponse},
        },
        summary=f"Get a single {label} by id",
    )
    async def get_resource(resource_id: str, service=Depends(service_dependency)):
        item = await service.get(resource_id)
        return response_model.model_validate(item)

    @router.post(
        "",
        response_model=response_model,
        status_code=status.HTTP_201_CREATED,
        responses=ERROR_RESPONSES,
        summary=f"Create a {label}",
    )
    async def create_resource(
        request: Request,
        response: Response,
        payload: Optional[request_model] = None,
        service=Depends(service_dependency),
    ):
        item = await service.create(payload or request_model())
        response.headers["Location"] = location_for(request, item.id)
        return response_model.model_validate(item)

    @router.put(
        "/{resource_id}",
        response_model=response_model,
        responses={
            **ERROR_RESPONSES,
            404: {"description": f"{label.capitalize()} not found", "model": ErrorResponse},
        },
        summary=f"Rename a {label}",
    )
    async def update_resource(
        resource_id: str,
        payload: Optional[request_model] = None,
        service=Depends(service_dependency),
    ):
        item = await service.update(resource_id, payload or request_model())
        return response_model.model_validate(item)

    @router.delete(
        "/{resource_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        response_class=Response,
        responses={400: ERROR_RESPONSES[400]},
        summary=f"Delete a {label} (no-op if it does not exist)",
    )
    async def delete_resource(resource_id: str, service=Depends(service_dependency)):
        await service.delete(resource_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router
