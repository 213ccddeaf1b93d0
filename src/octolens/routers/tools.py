"""Tool catalog endpoint router."""

from fastapi import APIRouter

from octolens.models.tools import ToolListResponse, ToolResponse
from octolens.tools import GITHUB_TOOLS

router = APIRouter(prefix="/api/v1", tags=["tools"])


@router.get("/tools", response_model=ToolListResponse)
async def list_tools() -> ToolListResponse:
    """List the tools offered to the model, with their parameter schemas."""
    return ToolListResponse(
        tools=[
            ToolResponse(
                name=tool.name,
                description=tool.description,
                parameters=tool.json_schema(),
            )
            for tool in GITHUB_TOOLS
        ]
    )
