"""Business logic for scans (one photo analysis and the recipes it produced)."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from fridge_chef.models.image import ScanImage
from fridge_chef.models.scan import Scan
from fridge_chef.services.ai_schemas import RecipeResponseSchema
from fridge_chef.services.file_service import ImageUpload
from fridge_chef.services.recipe_service import RecipeService


class ScanService:
    """Service for scan-related operations."""

    @staticmethod
    def create_scan(
        db: Session,
        user_id: UUID,
        ingredients: str,
        images: List[ImageUpload],
        recipes: Optional[RecipeResponseSchema] = None,
    ) -> Scan:
        """
        Persist a scan with its photos and, optionally, the suggested recipes.

        Everything is written in one transaction.

        Args:
            db: Database session
            user_id: Owner
            ingredients: Raw detector output
            images: Photos captured for this scan
            recipes: Generator output; each suggestion becomes a Recipe

        Returns:
            Created Scan object with recipes loaded
        """
        scan = Scan(user_id=user_id, ingredients=ingredients)
        scan.images = [
            ScanImage(content_type=image.content_type, blob=image.data)
            for image in images
        ]
        db.add(scan)
        db.flush()  # Get the scan ID

        if recipes is not None:
            for suggestion in recipes.suggested_recipes:
                recipe = RecipeService.build_recipe(user_id, suggestion, scan_id=scan.id)
                db.add(recipe)

        db.commit()
        db.refresh(scan)
        return scan

    @staticmethod
    def get_scan(db: Session, scan_id: int) -> Optional[Scan]:
        return db.query(Scan).filter(Scan.id == scan_id).first()

    @staticmethod
    def delete_scan(db: Session, scan_id: int) -> bool:
        """Delete a scan and its photos. Recipes it produced are kept."""
        scan = db.query(Scan).filter(Scan.id == scan_id).first()
        if scan:
            db.delete(scan)
            db.commit()
            return True
        return False


# Singleton instance
scan_service = ScanService()
