# Models module
from app.models.scheme import (
    UserCriteria, SchemeSearchRequest, SchemeRecord,
    SchemeSearchResponse, NotFoundResponse, ErrorResponse,
)
