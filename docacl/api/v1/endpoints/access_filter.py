"""Access filter endpoints.

Query-parser style entry point: the caller passes the requester's identity
parameters and gets back the filter to attach to its own search request.
Unlike the search operation, no bypass rules apply here.
"""

from fastapi import APIRouter, Request

from docacl.api.deps import Inject
from docacl.domains.access_filter.protocols import AccessFilterServiceProtocol
from docacl.platform.destinations.solr.filter_translator import FilterTranslator
from docacl.schemas.access_filter import AccessFilterResponse

router = APIRouter()


@router.get("", response_model=AccessFilterResponse)
async def build_access_filter(
    request: Request,
    service: AccessFilterServiceProtocol = Inject(AccessFilterServiceProtocol),
    translator: FilterTranslator = Inject(FilterTranslator),
) -> AccessFilterResponse:
    """Build the access control filter for the identity in the query string.

    Recognized parameters: ``AuthenticatedUserName`` / ``AuthenticatedUserDomain``,
    ``AuthenticatedUserName_<i>`` / ``AuthenticatedUserDomain_<i>``, and
    repeated ``UserTokens`` for anonymous callers.
    """
    query_params = request.query_params
    params = {key: query_params.getlist(key) for key in query_params.keys()}

    result = await service.build(params)
    return AccessFilterResponse(
        identities=result.identities,
        tokens=result.tokens,
        filter=result.filter.to_dict(),
        fq=translator.translate(result.filter),
        constant_score=result.filter.constant_score,
    )
