from fastapi import APIRouter, Depends, HTTPException, Header
from screener.api.schemas import SessionSnapshot
from screener.settings import settings
from screener.store.session_repo import load_session

router = APIRouter(prefix="/admin", tags=["admin"])

def require_admin(x_admin_key: str = Header(default="", alias="x-admin-key")):
    # No key configured: admin routes are disabled
    if not settings.ADMIN_API_KEY:
        raise HTTPException(status_code=403, detail="Admin access disabled (no key configured)")
    if x_admin_key != settings.ADMIN_API_KEY:
        raise HTTPException(status_code=403, detail="Invalid admin key")

@router.get("/session/{identity}", response_model=SessionSnapshot)
def get_session_snapshot(identity: str, _=Depends(require_admin)):
    """Current screening progress for one contact."""
    s = load_session(identity)
    if s is None:
        raise HTTPException(status_code=404, detail="No session")
    return SessionSnapshot(
        identity=identity,
        step=s.step,
        answers=s.answers,
        startedAt=s.startedAt,
        lastActivityAt=s.lastActivityAt,
        completed=s.completed,
    )
