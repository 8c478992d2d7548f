from pydantic import BaseModel


class HealthResponse(BaseModel):
    """
    Standard health check response model.

    ``status`` is "healthy" when the cache is connected or deliberately
    disabled, "degraded" when it is configured but unreachable. The service
    keeps answering from the primary store in both cases.
    """

    status: str
    timestamp: str
    version: str
    components: dict | None = None
