from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.deps import get_db
from app.services.clubs import list_categories
from app.services.serializers import category_public

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("")
def categories(db: Session = Depends(get_db)):
    return {"success": True, "data": [category_public(c) for c in list_categories(db)]}
