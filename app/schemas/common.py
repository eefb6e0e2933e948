from pydantic import BaseModel


class ErrorResponse(BaseModel):
    error: dict[str, str | None]


class HealthResponse(BaseModel):
    status: str
    name: str
    version: str
    environment: str
    git_sha: str
