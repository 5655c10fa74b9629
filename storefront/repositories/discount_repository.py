"""
Discount Repository - Data Access Layer
"""
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import desc, func, or_

from storefront.models.discount import Discount


class DiscountRepository:
    """Repository for Discount CRUD operations"""
    
    def __init__(self, db: Session):
        self.db = db
    
    def get_all(self) -> List[Discount]:
        return self.db.query(Discount).order_by(desc(Discount.created_at), desc(Discount.id)).all()
    
    def get_by_id(self, discount_id: int) -> Optional[Discount]:
        return self.db.query(Discount).filter(Discount.id == discount_id).first()
    
    def get_by_code(self, code: str, for_update: bool = False) -> Optional[Discount]:
        """Case-insensitive exact match; for_update locks the row for the current transaction"""
        query = self.db.query(Discount).filter(
            func.upper(Discount.code) == code.strip().upper()
        )
        if for_update:
            query = query.with_for_update()
        return query.first()
    
    def create(self, data: dict) -> Discount:
        discount = Discount(**data)
        self.db.add(discount)
        self.db.commit()
        self.db.refresh(discount)
        return discount
    
    def update(self, discount: Discount, data: dict) -> Discount:
        for field, value in data.items():
            setattr(discount, field, value)
        self.db.commit()
        self.db.refresh(discount)
        return discount
    
    def delete(self, discount: Discount):
        self.db.delete(discount)
        self.db.commit()
    
    def increment_used_count(self, discount_id: int) -> bool:
        """
        Count one more use inside the caller's transaction (no commit)
        
        The update only applies while the code is under its usage limit.
        
        Returns:
            False if the code is missing or already used up
        """
        updated = self.db.query(Discount).filter(
            Discount.id == discount_id,
            or_(Discount.usage_limit.is_(None), Discount.used_count < Discount.usage_limit)
        ).update({Discount.used_count: Discount.used_count + 1}, synchronize_session=False)
        return updated == 1
