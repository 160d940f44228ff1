from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..core.errors import guarded, respond
from ..core.results import Err, ErrorKind, Ok
from ..crud.comments import create_comment, list_comments
from ..db.session import get_db
from ..deps.auth import RequestContext, get_request_context
from ..schemas.project import CommentCreate, CommentOut

router = APIRouter(prefix="/api/projects/{project_id}/comments", tags=["comments"])


@router.get("")
@guarded("Failed to fetch comments")
def api_list_comments(project_id: str, db: Session = Depends(get_db)) -> JSONResponse:
    result = list_comments(db, project_id)
    if not result.ok:
        return respond(result)
    return respond(Ok({"comments": [CommentOut.model_validate(comment) for comment in result.value]}))


@router.post("")
@guarded("Failed to create comment")
def api_create_comment(
    project_id: str,
    payload: CommentCreate,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
) -> JSONResponse:
    if ctx.identity is None:
        return respond(Err(ErrorKind.UNAUTHENTICATED, "Authentication required"))
    result = create_comment(db, project_id, ctx.identity.id, payload.content)
    if not result.ok:
        return respond(result)
    return respond(Ok({"comment": CommentOut.model_validate(result.value)}), status_code=201)
