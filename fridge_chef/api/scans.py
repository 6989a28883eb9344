"""API endpoints for past scans."""

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from fridge_chef.database import get_db
from fridge_chef.models.scan import Scan
from fridge_chef.models.user import User
from fridge_chef.services.auth.dependencies import get_current_user
from fridge_chef.services.scan_service import scan_service

router = APIRouter(prefix="/scans", tags=["scans"])


def _get_own_scan(db: Session, scan_id: int, user: User) -> Scan:
    scan = scan_service.get_scan(db, scan_id)
    if not scan:
        raise HTTPException(status_code=404, detail="Scan not found")

    # Verify ownership
    if scan.user_id != user.id:
        raise HTTPException(status_code=403, detail="Access denied")
    return scan


@router.get("/{scan_id}")
async def get_scan(
    scan_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    scan = _get_own_scan(db, scan_id, user)
    return {
        "id": scan.id,
        "ingredients": scan.ingredients,
        "imageCount": len(scan.images),
        "recipeIds": sorted(recipe.id for recipe in scan.recipes),
        "createdAt": scan.created_at.isoformat() if scan.created_at else None,
    }


@router.delete("/{scan_id}", status_code=204)
async def delete_scan(
    scan_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Delete a scan and its photos. Recipes it produced are kept."""
    scan = _get_own_scan(db, scan_id, user)
    scan_service.delete_scan(db, scan.id)
    return Response(status_code=204)
