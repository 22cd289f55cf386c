from fastapi.responses import RedirectResponse

REVALIDATE_HEADER = "X-Revalidate-Path"


def redirect_after_mutation(path: str) -> RedirectResponse:
    """See-other redirect to a listing page, flagging it for cache revalidation."""
    response = RedirectResponse(url=path, status_code=303)
    response.headers[REVALIDATE_HEADER] = path
    return response
