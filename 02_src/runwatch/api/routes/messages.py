"""Agent message API routes."""

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import JSONResponse

from ...app import IApplication
from ...errors import InvalidRequest


class AgentMessageResponse(BaseModel):
    """Wire projection of an agent message."""

    id: str
    fromAgent: str
    fromRole: str | None = None
    toAgent: str | None = None
    messageType: str
    content: str
    phase: int
    parentId: str | None = None
    createdAt: str


class MessagesResponse(BaseModel):
    """Response model for a run's messages."""

    messages: list[AgentMessageResponse]
    total: int


class ErrorResponse(BaseModel):
    """Client error body."""

    error: str


def create_messages_router(app: IApplication) -> APIRouter:
    """Create agent message router."""
    router = APIRouter(prefix="/api", tags=["messages"])

    @router.get(
        "/messages",
        response_model=MessagesResponse,
        responses={400: {"model": ErrorResponse}},
    )
    async def get_messages(
        pipeline_run_id: str | None = Query(
            None, alias="pipelineRunId", description="Pipeline run to read"
        ),
        agent: str | None = Query(
            None, description="Keep messages this agent sent or received"
        ),
    ):
        """Get the inter-agent messages of a pipeline run in creation order."""
        try:
            result = await app.messages.list_messages(pipeline_run_id, agent=agent)
            return result.to_dict()
        except InvalidRequest as e:
            return JSONResponse(status_code=400, content={"error": str(e)})
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    return router
