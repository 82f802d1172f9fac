# backend/carwash/services/user_service.py
"""Client profile reads and updates."""

from sqlalchemy.orm import Session

from ..core.exceptions import ConflictException, NotFoundException, ValidationException
from ..core.validators import (
    validate_document_type,
    validate_phone,
    validate_plate,
    validate_vehicle_type,
)
from ..models.user import User
from ..repositories.factory import RepositoryFactory
from ..schemas.user import ProfileComplete, ProfileUpdate
from .base import BaseService


class UserService(BaseService):
    def __init__(self, db: Session):
        super().__init__(db)
        self.repository = RepositoryFactory.create_user_repository(db)

    def get_profile(self, user_id: str) -> User:
        user = self.repository.get_by_id(user_id)
        if user is None:
            raise NotFoundException("User not found")
        return user

    @BaseService.measure_operation("complete_profile")
    def complete_profile(self, user_id: str, data: ProfileComplete) -> User:
        user = self.get_profile(user_id)
        if not data.full_name.strip():
            raise ValidationException("Full name is required")
        if self.repository.document_exists(data.document_number, exclude_user_id=user_id):
            raise ConflictException("Document is already registered", code="DOCUMENT_TAKEN")

        with self.transaction():
            self.repository.update(
                user_id,
                full_name=data.full_name.strip(),
                phone=validate_phone(data.phone),
                document_type=validate_document_type(data.document_type),
                document_number=data.document_number,
                vehicle_plate=validate_plate(data.vehicle_plate),
                vehicle_type=validate_vehicle_type(data.vehicle_type),
                vehicle_brand=data.vehicle_brand,
                vehicle_model=data.vehicle_model,
                vehicle_color=data.vehicle_color,
                profile_completed=True,
            )
        self.log_operation("complete_profile", user_id=user_id)
        return user

    @BaseService.measure_operation("update_profile")
    def update_profile(self, user_id: str, data: ProfileUpdate) -> User:
        user = self.get_profile(user_id)
        changes = data.model_dump(exclude_unset=True)

        if "full_name" in changes and not (changes["full_name"] or "").strip():
            raise ValidationException("Full name cannot be empty")
        if changes.get("phone") is not None:
            changes["phone"] = validate_phone(changes["phone"])
        if changes.get("vehicle_plate") is not None:
            changes["vehicle_plate"] = validate_plate(changes["vehicle_plate"])
        if changes.get("vehicle_type") is not None:
            changes["vehicle_type"] = validate_vehicle_type(changes["vehicle_type"])

        with self.transaction():
            self.repository.update(user_id, **changes)
        return user
