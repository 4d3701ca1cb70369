# =============================================================================
# app/responses.py - Shared Response Helpers
# =============================================================================

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from core.models.social import MutationResult


def mutation_response(result: MutationResult) -> MutationResult | JSONResponse:
    """
    200 with the result when the write went through.

    A failed write is still a MutationResult (so the client can restore
    previous_value) but is sent as 502, since the backend refused it.
    """
    if result.ok:
        return result
    return JSONResponse(status_code=502, content=jsonable_encoder(result))
