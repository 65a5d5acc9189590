# climacare/routers/dashboard.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..core.api import ok
from ..core.db import get_db
from ..core.security import get_current_user
from ..services.dashboard_service import dashboard_stats

router = APIRouter(
    prefix="/api/dashboard",
    tags=["dashboard"],
    dependencies=[Depends(get_current_user)],
)


@router.get("/stats")
def dashboard_stats_ep(db: Session = Depends(get_db)):
    return ok(dashboard_stats(db))
