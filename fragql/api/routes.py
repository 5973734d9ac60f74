"""
fragql API routes.

POST /graphql accepts two request forms:
1. Document form: {"query": "...", "variables": {...}}
2. Structured form: {"operation": "Query", "field": "drafts",
   "arguments": {...}, "selection": ["id", {"name": "title"}]}

Operation errors are part of the GraphQL result and come back with 200.
A request that names no operation at all is rejected with 400.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Optional, Union

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel, Field

from ..execution import Executor
from ..schema import CompiledSchema

logger = logging.getLogger(__name__)

router = APIRouter(tags=["GraphQL"])


# =============================================================================
# Request Models
# =============================================================================


class SelectionModel(BaseModel):
    """One selected field with optional alias, arguments and sub-selection."""
    name: str
    alias: Optional[str] = None
    arguments: dict[str, Any] = Field(default_factory=dict)
    selection: list[Union[str, SelectionModel]] = Field(default_factory=list)


SelectionModel.model_rebuild()


class GraphQLRequest(BaseModel):
    """GraphQL request in document or structured form."""
    query: Optional[str] = Field(None, description="GraphQL document with one root field")
    variables: Optional[dict[str, Any]] = Field(None, description="Document variables")

    operation: Optional[str] = Field(None, description="Query or Mutation")
    field_name: Optional[str] = Field(None, alias="field", description="Root field name")
    alias: Optional[str] = Field(None, description="Response key for the root field")
    arguments: dict[str, Any] = Field(default_factory=dict)
    selection: list[Union[str, SelectionModel]] = Field(default_factory=list)

    model_config = {"populate_by_name": True}


# =============================================================================
# Dependencies
# =============================================================================


def get_executor(request: Request) -> Executor:
    """Get the executor from app state."""
    return request.app.state.executor


def get_schema(request: Request) -> CompiledSchema:
    """Get the compiled schema from app state."""
    return request.app.state.schema


def _selection_items(selection: list[Union[str, SelectionModel]]) -> list[Any]:
    return [item if isinstance(item, str) else item.model_dump() for item in selection]


# =============================================================================
# Endpoints
# =============================================================================


@router.post("/graphql")
async def graphql_endpoint(body: GraphQLRequest, executor: Executor = Depends(get_executor)):
    """Execute one operation and return {"data", "errors"}."""
    request_id = uuid.uuid4().hex

    if body.query is not None:
        result = await executor.execute_document(body.query, body.variables, request_id=request_id)
    elif body.operation and body.field_name:
        result = await executor.execute(
            body.operation,
            body.field_name,
            body.arguments,
            _selection_items(body.selection),
            alias=body.alias,
            request_id=request_id,
        )
    else:
        return JSONResponse(
            status_code=400,
            content={
                "error": "Request needs either 'query' or both 'operation' and 'field'",
                "error_code": "BAD_REQUEST",
            },
        )

    if not result.ok:
        logger.info(
            f"Operation finished with {len(result.errors)} error(s)",
            extra={"request_id": request_id, "error_codes": [e.code for e in result.errors]},
        )
    return result.to_dict()


@router.get("/schema", response_class=PlainTextResponse)
async def schema_sdl(schema: CompiledSchema = Depends(get_schema)):
    """SDL document of the compiled schema."""
    return schema.sdl


@router.get("/schema/shape")
async def schema_shape(schema: CompiledSchema = Depends(get_schema)):
    """JSON shape of the compiled schema."""
    return schema.to_dict()


@router.get("/health")
async def health(schema: CompiledSchema = Depends(get_schema)):
    return {"status": "healthy", "service": "fragql", "fingerprint": schema.fingerprint}
